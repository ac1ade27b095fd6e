from datetime import datetime, timezone
from typing import Optional


def parse_timestamp(value: Optional[str]) -> datetime:
    """
    Parses a kubelet RFC 3339 timestamp ('2023-01-01T00:00:00Z') into an
    aware UTC datetime. Timestamps without an offset are read as UTC.

    Raises:
        ValueError: If the value is missing or not a timestamp.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")
    # fromisoformat() only accepts 'Z' from Python 3.11 on.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_iso_z(dt: datetime) -> str:
    """
    Converts an aware datetime to an ISO 8601 string with 'Z' suffix for UTC.
    """
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
