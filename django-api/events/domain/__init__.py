from events.domain.models import Event, EventFields, Registration, UserIdentity
from events.domain.status import (
    EventStatus,
    MissingRegistrationPolicy,
    StatusFilter,
    matches_status,
    resolve_status,
)
from events.domain.value_objects import EventId, RegistrationId

__all__ = [
    "Event",
    "EventFields",
    "Registration",
    "UserIdentity",
    "EventId",
    "RegistrationId",
    "EventStatus",
    "StatusFilter",
    "MissingRegistrationPolicy",
    "resolve_status",
    "matches_status",
]
