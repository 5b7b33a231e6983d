"""Read-through caching decorators over the stores.

Only event reads and per-event registrant lists are cached. A user's own
registrations are always read from the wrapped store. Invalidation on
writes is done by the model signals in events/signals.py, so edits made
outside the API (e.g. the admin site) invalidate too.
"""

from django.core.cache import cache

from events.cache_keys import EVENT_LIST_KEY, event_key, event_registrations_key
from events.domain import Event, EventFields, EventId, Registration
from events.stores.interfaces import EventStore, RegistrationStore

_MISSING = object()


class CachedEventStore(EventStore):
    def __init__(self, inner: EventStore, timeout: int) -> None:
        self._inner = inner
        self._timeout = timeout

    def list_events(self) -> list[Event]:
        events = cache.get(EVENT_LIST_KEY, _MISSING)
        if events is _MISSING:
            events = self._inner.list_events()
            cache.set(EVENT_LIST_KEY, events, self._timeout)
        return events

    def get_event(self, event_id: EventId) -> Event | None:
        key = event_key(event_id)
        event = cache.get(key, _MISSING)
        if event is _MISSING:
            event = self._inner.get_event(event_id)
            if event is None:
                return None
            cache.set(key, event, self._timeout)
        return event

    def event_exists(self, event_id: EventId) -> bool:
        return self.get_event(event_id) is not None

    def create_event(self, fields: EventFields) -> Event:
        return self._inner.create_event(fields)

    def update_event(self, event_id: EventId, fields: EventFields) -> Event | None:
        return self._inner.update_event(event_id, fields)

    def delete_event(self, event_id: EventId) -> bool:
        return self._inner.delete_event(event_id)


class CachedRegistrationStore(RegistrationStore):
    def __init__(self, inner: RegistrationStore, timeout: int) -> None:
        self._inner = inner
        self._timeout = timeout

    def find_registration(self, event_id: EventId, user_id: str) -> Registration | None:
        return self._inner.find_registration(event_id, user_id)

    def insert_registration(self, registration: Registration) -> Registration:
        return self._inner.insert_registration(registration)

    def list_registrations_by_user(self, user_id: str) -> list[Registration]:
        return self._inner.list_registrations_by_user(user_id)

    def list_registrations_by_event(self, event_id: EventId) -> list[Registration]:
        key = event_registrations_key(event_id)
        registrations = cache.get(key, _MISSING)
        if registrations is _MISSING:
            registrations = self._inner.list_registrations_by_event(event_id)
            cache.set(key, registrations, self._timeout)
        return registrations

    def delete_registrations_for_event(self, event_id: EventId) -> int:
        return self._inner.delete_registrations_for_event(event_id)
