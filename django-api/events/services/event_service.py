"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum

from events.domain import (
    Event,
    EventFields,
    EventId,
    EventStatus,
    MissingRegistrationPolicy,
    StatusFilter,
    matches_status,
    resolve_status,
)
from events.domain.errors import (
    EventNotFoundError,
    InvalidEventDataError,
    InvalidEventIdError,
)
from events.stores.interfaces import EventStore, RegistrationStore

logger = logging.getLogger(__name__)

SORT_FIELDS = ("date", "title")


class OrphanedRegistrationPolicy(str, Enum):
    """What happens to an event's registrations when the event is deleted."""

    KEEP = "keep"
    HIDE = "hide"
    PURGE = "purge"


def parse_event_id(event_id: str) -> EventId:
    """Parse a raw event ID.

    Raises:
        InvalidEventIdError: If the value is not a valid UUID.
    """
    try:
        return EventId.from_string(event_id)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidEventIdError() from exc


def _utcnow() -> datetime:
    return datetime.now(UTC)


class EventService:
    """Service for event catalog operations."""

    def __init__(
        self,
        store: EventStore,
        registrations: RegistrationStore,
        clock: Callable[[], datetime] = _utcnow,
        missing_registration: MissingRegistrationPolicy = (
            MissingRegistrationPolicy.UPCOMING_UNTIL_DATE
        ),
        orphaned_registrations: OrphanedRegistrationPolicy = (
            OrphanedRegistrationPolicy.KEEP
        ),
    ) -> None:
        self._store = store
        self._registrations = registrations
        self._clock = clock
        self._missing_registration = missing_registration
        self._orphaned_registrations = orphaned_registrations

    def list_events(
        self,
        status: StatusFilter = StatusFilter.ALL,
        search: str | None = None,
        sort_by: str = "date",
        ascending: bool = False,
        now: datetime | None = None,
    ) -> list[Event]:
        """Return events matching a status tab and search term, sorted.

        Search matches title or description, case-insensitively.
        """
        if sort_by not in SORT_FIELDS:
            raise ValueError(f"Unsupported sort field: {sort_by}")
        now = now or self._clock()
        term = (search or "").strip().lower()

        events = [
            event
            for event in self._store.list_events()
            if matches_status(event, status, now, self._missing_registration)
            and (
                not term
                or term in event.title.lower()
                or term in event.description.lower()
            )
        ]
        if sort_by == "title":
            key = lambda event: event.title.lower()  # noqa: E731
        else:
            key = lambda event: event.date  # noqa: E731
        return sorted(events, key=key, reverse=not ascending)

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def status_of(self, event: Event, now: datetime | None = None) -> EventStatus:
        return resolve_status(event, now or self._clock(), self._missing_registration)

    def create_event(self, fields: EventFields) -> Event:
        """Create an event.

        Raises:
            InvalidEventDataError: If the title is blank.
        """
        self._validate(fields)
        event = self._store.create_event(fields)
        logger.info("Created event %s (%s)", event.id, event.title)
        return event

    def update_event(self, event_id: str, fields: EventFields) -> Event:
        """Overwrite an event's fields.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            InvalidEventDataError: If the title is blank.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        self._validate(fields)
        event = self._store.update_event(parsed, fields)
        if event is None:
            raise EventNotFoundError(event_id)
        logger.info("Updated event %s", event.id)
        return event

    def delete_event(self, event_id: str) -> None:
        """Delete an event and apply the orphaned registration policy.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        if not self._store.delete_event(parsed):
            raise EventNotFoundError(event_id)

        if self._orphaned_registrations is OrphanedRegistrationPolicy.PURGE:
            purged = self._registrations.delete_registrations_for_event(parsed)
            logger.info("Deleted event %s and purged %d registrations", parsed, purged)
        else:
            logger.info(
                "Deleted event %s, registrations kept (policy=%s)",
                parsed,
                self._orphaned_registrations.value,
            )

    def _validate(self, fields: EventFields) -> None:
        if not fields.title or not fields.title.strip():
            raise InvalidEventDataError("Event title is required")
        if fields.registration is not None and fields.registration > fields.date:
            logger.warning(
                "Registration for %r opens after the event date (%s > %s)",
                fields.title,
                fields.registration.isoformat(),
                fields.date.isoformat(),
            )
