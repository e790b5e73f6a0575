"""
UTC timestamp helpers.

Every timestamp DocSentinel emits (hash generation time, log records) is
timezone-aware UTC.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware datetime with tzinfo=timezone.utc."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """
    Current UTC time as ISO 8601 with a Z suffix.

    Returns format: "2025-12-08T03:00:00.123456Z"
    """
    return utc_now().isoformat().replace("+00:00", "Z")
