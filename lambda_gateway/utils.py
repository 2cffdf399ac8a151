"""
Small shared helpers.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """
    Return an ISO 8601 UTC timestamp with millisecond precision and a 'Z' suffix,
    e.g. "2024-05-01T12:30:45.123Z".
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
