from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

# Organization/IP recorded on audit entries produced by the system itself
SYSTEM_ORGANIZATION_ID = UUID("00000000-0000-0000-0000-000000000000")
SYSTEM_IP_ADDRESS = "0.0.0.0"


def utc_now() -> datetime:
    """Naive UTC now, matching the naive DateTime columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
