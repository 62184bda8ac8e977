"""Small value conversions shared by the sinks."""
from datetime import datetime, timezone
from typing import Optional


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a source timestamp to an absolute UTC instant.

    Naive datetimes are read as UTC, which is how the source store hands
    them out. Aware datetimes are converted.

    Args:
        value: Timestamp from the source record, or None

    Returns:
        Timezone-aware UTC datetime, or None if value is None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
