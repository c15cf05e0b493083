"""Timezone-aware clock helpers."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time in UTC, used for column defaults."""
    return datetime.now(timezone.utc)
