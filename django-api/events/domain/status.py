"""Event status derived from registration and event time windows.

Status is never stored. It is computed from the current time on every call.
"""

from datetime import UTC, datetime
from enum import Enum

from events.domain.models import Event

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class EventStatus(str, Enum):
    """Temporal phase of an event."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    EventStatus.UPCOMING: "Upcoming Event",
    EventStatus.ONGOING: "Ongoing Event",
    EventStatus.COMPLETED: "Event Completed",
}


class StatusFilter(str, Enum):
    """Status tabs offered by event listings."""

    ALL = "all"
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class MissingRegistrationPolicy(str, Enum):
    """How to resolve an event whose registration-open time is missing."""

    UPCOMING_UNTIL_DATE = "upcoming_until_date"
    EPOCH = "epoch"


def resolve_status(
    event: Event,
    now: datetime,
    missing_registration: MissingRegistrationPolicy = (
        MissingRegistrationPolicy.UPCOMING_UNTIL_DATE
    ),
) -> EventStatus:
    """Classify ``event`` at ``now``.

    completed once ``now`` is past ``date``, ongoing inside the inclusive
    ``[registration, date]`` window, upcoming before it.
    """
    if now > event.date:
        return EventStatus.COMPLETED

    opens_at = event.registration
    if opens_at is None:
        if missing_registration is MissingRegistrationPolicy.EPOCH:
            opens_at = EPOCH
        else:
            return EventStatus.UPCOMING

    if opens_at <= now:
        return EventStatus.ONGOING
    return EventStatus.UPCOMING


def matches_status(
    event: Event,
    status_filter: StatusFilter,
    now: datetime,
    missing_registration: MissingRegistrationPolicy = (
        MissingRegistrationPolicy.UPCOMING_UNTIL_DATE
    ),
) -> bool:
    if status_filter is StatusFilter.ALL:
        return True
    return resolve_status(event, now, missing_registration).value == status_filter.value
