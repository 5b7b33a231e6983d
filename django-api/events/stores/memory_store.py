"""In-memory stores.

State is held per instance so separate services never share registrations.
"""

import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime

from events.domain import Event, EventFields, EventId, Registration
from events.domain.errors import AlreadyRegisteredError
from events.stores.interfaces import EventStore, RegistrationStore


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemoryEventStore(EventStore):
    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._events: dict[EventId, Event] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def list_events(self) -> list[Event]:
        with self._lock:
            events = list(self._events.values())
        return sorted(events, key=lambda e: e.date, reverse=True)

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def event_exists(self, event_id: EventId) -> bool:
        return event_id in self._events

    def create_event(self, fields: EventFields) -> Event:
        now = self._clock()
        event = Event(
            id=EventId.generate(),
            title=fields.title,
            description=fields.description,
            date=fields.date,
            registration=fields.registration,
            time=fields.time,
            location=fields.location,
            image_ref=fields.image_ref,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._events[event.id] = event
        return event

    def update_event(self, event_id: EventId, fields: EventFields) -> Event | None:
        with self._lock:
            current = self._events.get(event_id)
            if current is None:
                return None
            updated = replace(
                current,
                title=fields.title,
                description=fields.description,
                date=fields.date,
                registration=fields.registration,
                time=fields.time,
                location=fields.location,
                image_ref=fields.image_ref,
                updated_at=self._clock(),
            )
            self._events[event_id] = updated
        return updated

    def delete_event(self, event_id: EventId) -> bool:
        with self._lock:
            return self._events.pop(event_id, None) is not None


class InMemoryRegistrationStore(RegistrationStore):
    def __init__(self) -> None:
        self._registrations: list[Registration] = []
        self._lock = threading.Lock()

    def find_registration(self, event_id: EventId, user_id: str) -> Registration | None:
        with self._lock:
            return self._find(event_id, user_id)

    def insert_registration(self, registration: Registration) -> Registration:
        with self._lock:
            if self._find(registration.event_id, registration.user_id) is not None:
                raise AlreadyRegisteredError(
                    str(registration.event_id), registration.user_id
                )
            self._registrations.append(registration)
        return registration

    def list_registrations_by_user(self, user_id: str) -> list[Registration]:
        with self._lock:
            return [r for r in self._registrations if r.user_id == user_id]

    def list_registrations_by_event(self, event_id: EventId) -> list[Registration]:
        with self._lock:
            return [r for r in self._registrations if r.event_id == event_id]

    def delete_registrations_for_event(self, event_id: EventId) -> int:
        with self._lock:
            kept = [r for r in self._registrations if r.event_id != event_id]
            removed = len(self._registrations) - len(kept)
            self._registrations = kept
        return removed

    def _find(self, event_id: EventId, user_id: str) -> Registration | None:
        for registration in self._registrations:
            if registration.event_id == event_id and registration.user_id == user_id:
                return registration
        return None
