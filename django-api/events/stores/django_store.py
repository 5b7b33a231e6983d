"""Django ORM implementations of the event and registration stores."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps

from django.db import IntegrityError, InterfaceError, OperationalError, transaction

from events import models
from events.domain import Event, EventFields, EventId, Registration, RegistrationId
from events.domain.errors import AlreadyRegisteredError, StorageUnavailableError
from events.stores.interfaces import EventStore, RegistrationStore

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors() -> Iterator[None]:
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.error("Database unavailable: %s", exc)
        raise StorageUnavailableError() from exc


def _guarded(method: Callable) -> Callable:
    @wraps(method)
    def wrapper(*args, **kwargs):
        with _storage_errors():
            return method(*args, **kwargs)

    return wrapper


def _to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(value=row.id),
        title=row.title,
        description=row.description,
        date=row.date,
        registration=row.registration,
        time=row.time,
        location=row.location,
        image_ref=row.image_ref,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_registration(row: models.Registration) -> Registration:
    return Registration(
        id=RegistrationId(value=row.id),
        event_id=EventId(value=row.event_id),
        user_id=row.user_id,
        user_name=row.user_name,
        user_email=row.user_email,
        registered_at=row.registered_at,
    )


def _apply_fields(row: models.Event, fields: EventFields) -> None:
    row.title = fields.title
    row.description = fields.description
    row.date = fields.date
    row.registration = fields.registration
    row.time = fields.time
    row.location = fields.location
    row.image_ref = fields.image_ref


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    @_guarded
    def list_events(self) -> list[Event]:
        return [_to_event(row) for row in models.Event.objects.order_by("-date")]

    @_guarded
    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(pk=event_id.value).first()
        return _to_event(row) if row is not None else None

    @_guarded
    def event_exists(self, event_id: EventId) -> bool:
        return models.Event.objects.filter(pk=event_id.value).exists()

    @_guarded
    def create_event(self, fields: EventFields) -> Event:
        row = models.Event()
        _apply_fields(row, fields)
        row.save()
        return _to_event(row)

    @_guarded
    def update_event(self, event_id: EventId, fields: EventFields) -> Event | None:
        row = models.Event.objects.filter(pk=event_id.value).first()
        if row is None:
            return None
        _apply_fields(row, fields)
        row.save()
        return _to_event(row)

    @_guarded
    def delete_event(self, event_id: EventId) -> bool:
        row = models.Event.objects.filter(pk=event_id.value).first()
        if row is None:
            return False
        # Instance delete so post_delete signals fire.
        row.delete()
        return True


class DjangoRegistrationStore(RegistrationStore):
    """Database-backed registration store.

    Uniqueness of (event_id, user_id) is enforced by a database constraint,
    so concurrent inserts for one pair cannot both succeed.
    """

    @_guarded
    def find_registration(self, event_id: EventId, user_id: str) -> Registration | None:
        row = models.Registration.objects.filter(
            event_id=event_id.value, user_id=user_id
        ).first()
        return _to_registration(row) if row is not None else None

    @_guarded
    def insert_registration(self, registration: Registration) -> Registration:
        row = models.Registration(
            id=registration.id.value,
            event_id=registration.event_id.value,
            user_id=registration.user_id,
            user_name=registration.user_name,
            user_email=registration.user_email,
            registered_at=registration.registered_at,
        )
        try:
            with transaction.atomic():
                row.save(force_insert=True)
        except IntegrityError as exc:
            raise AlreadyRegisteredError(
                str(registration.event_id), registration.user_id
            ) from exc
        return _to_registration(row)

    @_guarded
    def list_registrations_by_user(self, user_id: str) -> list[Registration]:
        rows = models.Registration.objects.filter(user_id=user_id).order_by(
            "registered_at"
        )
        return [_to_registration(row) for row in rows]

    @_guarded
    def list_registrations_by_event(self, event_id: EventId) -> list[Registration]:
        rows = models.Registration.objects.filter(event_id=event_id.value).order_by(
            "registered_at"
        )
        return [_to_registration(row) for row in rows]

    @_guarded
    def delete_registrations_for_event(self, event_id: EventId) -> int:
        rows = models.Registration.objects.filter(event_id=event_id.value)
        deleted, _ = rows.delete()
        return deleted
