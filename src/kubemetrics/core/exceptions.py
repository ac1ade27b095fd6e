class KubeMetricsError(Exception):
    """Base exception for kubemetrics."""

    pass


class ConfigurationError(KubeMetricsError):
    """Raised when the collector cannot start with the given settings."""

    pass


class ScrapeError(KubeMetricsError):
    """Base exception for recoverable failures during one scrape cycle."""

    pass


class TransportError(ScrapeError):
    """Raised when the summary endpoint cannot be reached (connection, TLS, timeout)."""

    pass


class ProtocolError(ScrapeError):
    """Raised when the summary endpoint answers with a non-2xx status."""

    EXCERPT_LENGTH = 200

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body_excerpt = body[: self.EXCERPT_LENGTH]
        super().__init__(
            f"expected 2xx from summary API, but got {status_code}. Response body = {self.body_excerpt}"
        )


class ParseError(ScrapeError):
    """Raised when the response body is not a summary document."""

    pass
