"""
Shared column helpers
"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current time, with microseconds for stable ordering"""
    return datetime.now(timezone.utc)
