"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from events.domain import Event, EventFields, EventId, Registration


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by date descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def create_event(self, fields: EventFields) -> Event:
        """Persist a new event and return it with its assigned ID."""
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, fields: EventFields) -> Event | None:
        """Overwrite an event's fields, or return None if not found."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> bool:
        """Delete an event. Return False if it did not exist.

        Registrations referencing the event are left untouched.
        """
        ...


class RegistrationStore(ABC):
    """Interface for registration persistence operations."""

    @abstractmethod
    def find_registration(self, event_id: EventId, user_id: str) -> Registration | None:
        """Return the registration for the pair, or None."""
        ...

    @abstractmethod
    def insert_registration(self, registration: Registration) -> Registration:
        """Persist a registration.

        Raises:
            AlreadyRegisteredError: If one already exists for
                (event_id, user_id). Must hold under concurrent inserts.
        """
        ...

    @abstractmethod
    def list_registrations_by_user(self, user_id: str) -> list[Registration]:
        """Return a user's registrations in insertion order."""
        ...

    @abstractmethod
    def list_registrations_by_event(self, event_id: EventId) -> list[Registration]:
        """Return an event's registrations, oldest first."""
        ...

    @abstractmethod
    def delete_registrations_for_event(self, event_id: EventId) -> int:
        """Delete all registrations for an event and return how many."""
        ...
