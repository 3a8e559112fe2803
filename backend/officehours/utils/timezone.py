"""
Time utilities.

All timestamps are timezone-aware UTC. Clients render local time.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current time in UTC (timezone-aware)."""
    return datetime.now(timezone.utc)
