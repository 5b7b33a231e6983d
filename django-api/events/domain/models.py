"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from events.domain.value_objects import EventId, RegistrationId

TBA = "TBA"
ANONYMOUS_USER_NAME = "Anonymous User"


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    ``registration`` is when registration opens. It is expected to be no
    later than ``date`` but that is not enforced.
    """

    id: EventId
    title: str
    description: str
    date: datetime
    registration: datetime | None
    created_at: datetime
    updated_at: datetime
    time: str | None = None
    location: str | None = None
    image_ref: str | None = None

    @property
    def display_time(self) -> str:
        return self.time.strip() if self.time and self.time.strip() else TBA

    @property
    def display_location(self) -> str:
        return self.location.strip() if self.location and self.location.strip() else TBA


@dataclass(frozen=True)
class EventFields:
    """Writable fields of an Event, as supplied by an admin create or edit."""

    title: str
    description: str
    date: datetime
    registration: datetime | None = None
    time: str | None = None
    location: str | None = None
    image_ref: str | None = None


@dataclass(frozen=True)
class UserIdentity:
    """The current session's user as supplied by the identity provider."""

    user_id: str
    display_name: str
    email: str

    @classmethod
    def from_names(
        cls,
        user_id: str,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
    ) -> "UserIdentity":
        name = f"{first_name or ''} {last_name or ''}".strip()
        return cls(
            user_id=user_id,
            display_name=name or ANONYMOUS_USER_NAME,
            email=email or "",
        )


@dataclass(frozen=True)
class Registration:
    """Domain representation of a Registration.

    ``user_name`` and ``user_email`` are a snapshot taken at write time and
    are never updated when the user's identity changes later.
    """

    id: RegistrationId
    event_id: EventId
    user_id: str
    user_name: str
    user_email: str
    registered_at: datetime
