"""ID placeholder and timestamp utilities."""

import uuid
from datetime import datetime, timedelta, timezone

# identifier carried by entities the issuer has not stamped yet
UNASSIGNED_ID = ""


def is_unassigned(entity_id: str | None) -> bool:
    """Return True when the id is still the unassigned placeholder."""
    return not entity_id


def generate_entity_id() -> str:
    """Generate a permanent entity ID (UUID4).

    The core never calls this on its own; it is the default issuer the
    server hands to a JourneyStore.
    """
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Current UTC time, forced strictly after `previous`."""
    now = utc_now()
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    floor = previous + timedelta(microseconds=1)
    return now if now > floor else floor
