import logging

import httpx

from ..core.config import config

logger = logging.getLogger(__name__)


def get_async_http_client(
    connect_timeout: float = None,
    read_timeout: float = None,
    verify=True,
    headers: dict = None,
) -> httpx.AsyncClient:
    """
    Returns a configured httpx.AsyncClient with:
    - Default timeouts (connect and read), so a hanging kubelet cannot stall a scrape.
    - Standard User-Agent header, merged with any extra headers (e.g. bearer auth).
    """
    c_timeout = connect_timeout if connect_timeout is not None else config.DEFAULT_TIMEOUT_CONNECT
    r_timeout = read_timeout if read_timeout is not None else config.DEFAULT_TIMEOUT_READ

    timeout = httpx.Timeout(r_timeout, connect=c_timeout)

    client_headers = {"User-Agent": config.USER_AGENT}
    if headers:
        client_headers.update(headers)

    # Note: httpx does not retry. The next scheduled scrape is the retry.
    return httpx.AsyncClient(
        timeout=timeout,
        headers=client_headers,
        verify=verify,
        follow_redirects=True,
    )
