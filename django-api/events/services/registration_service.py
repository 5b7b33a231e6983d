"""Registration service.

Enforces registration eligibility, records registrations and answers
"is this user registered for this event" from a per-user cache.

Registrations carry a snapshot of the user's name and email taken when the
registration is written. Later identity changes are not reflected in past
registrations.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from events.domain import (
    EventStatus,
    MissingRegistrationPolicy,
    Registration,
    RegistrationId,
    UserIdentity,
    resolve_status,
)
from events.domain.errors import (
    AlreadyRegisteredError,
    EventCompletedError,
    EventNotFoundError,
    InvalidEventIdError,
    NotAuthenticatedError,
)
from events.services.event_service import OrphanedRegistrationPolicy, parse_event_id
from events.services.registration_cache import RegistrationCache
from events.stores.interfaces import EventStore, RegistrationStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RegistrationService:
    """Service for event registrations."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        cache: RegistrationCache | None = None,
        clock: Callable[[], datetime] = _utcnow,
        missing_registration: MissingRegistrationPolicy = (
            MissingRegistrationPolicy.UPCOMING_UNTIL_DATE
        ),
        orphaned_registrations: OrphanedRegistrationPolicy = (
            OrphanedRegistrationPolicy.KEEP
        ),
    ) -> None:
        self._events = events
        self._registrations = registrations
        self._cache = cache or RegistrationCache(self.list_registrations_for_user)
        self._clock = clock
        self._missing_registration = missing_registration
        self._orphaned_registrations = orphaned_registrations

    @property
    def cache(self) -> RegistrationCache:
        return self._cache

    def register(self, event_id: str, identity: UserIdentity | None) -> Registration:
        """Register the identified user for an event.

        Raises:
            NotAuthenticatedError: If no identity is supplied.
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            EventCompletedError: If the event has already taken place.
            AlreadyRegisteredError: If the user is already registered.
            StorageUnavailableError: If the store fails transiently.
        """
        if identity is None or not identity.user_id:
            raise NotAuthenticatedError()

        parsed = parse_event_id(event_id)
        event = self._events.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)

        now = self._clock()
        status = resolve_status(event, now, self._missing_registration)
        if status is EventStatus.COMPLETED:
            raise EventCompletedError(event_id)

        if self._registrations.find_registration(parsed, identity.user_id) is not None:
            logger.info(
                "User %s already registered for event %s", identity.user_id, parsed
            )
            raise AlreadyRegisteredError(event_id, identity.user_id)

        # The store rejects a concurrent duplicate that slipped past the lookup.
        registration = self._registrations.insert_registration(
            Registration(
                id=RegistrationId.generate(),
                event_id=parsed,
                user_id=identity.user_id,
                user_name=identity.display_name,
                user_email=identity.email,
                registered_at=now,
            )
        )
        self._cache.record(identity.user_id, str(parsed))
        logger.info("User %s registered for event %s", identity.user_id, parsed)
        return registration

    def list_registrations_for_user(self, user_id: str) -> list[str]:
        """Return IDs of the events a user is registered for, in insertion order."""
        registrations = self._registrations.list_registrations_by_user(user_id)
        if self._orphaned_registrations is OrphanedRegistrationPolicy.HIDE:
            registrations = [
                r for r in registrations if self._events.event_exists(r.event_id)
            ]
        return [str(r.event_id) for r in registrations]

    def is_registered(self, event_id: str, user_id: str) -> bool:
        """Answer from the cache only. False until the user's cache is loaded."""
        try:
            key = str(parse_event_id(event_id))
        except InvalidEventIdError:
            return False
        return self._cache.contains(user_id, key)

    def load_registrations(self, user_id: str) -> None:
        """Populate the user's cache unless it already is."""
        self._cache.ensure_loaded(user_id)

    def refresh_registrations(self, user_id: str) -> list[str]:
        """Re-fetch the user's registrations, e.g. when a session regains focus.

        Returns the fresh event ID list, in insertion order.
        """
        return self._cache.refresh(user_id)

    def list_registrants(self, event_id: str) -> list[Registration]:
        """Return an event's registrations, oldest first.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        if not self._events.event_exists(parsed):
            raise EventNotFoundError(event_id)
        return self._registrations.list_registrations_by_event(parsed)
