"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from events.domain import UserIdentity
from events.services.event_service import EventService
from events.services.registration_service import RegistrationService
from events.stores.memory_store import InMemoryEventStore, InMemoryRegistrationStore
from tests.factories import NOW, FrozenClock


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(NOW)


@pytest.fixture
def event_store(clock) -> InMemoryEventStore:
    return InMemoryEventStore(clock=clock)


@pytest.fixture
def registration_store() -> InMemoryRegistrationStore:
    return InMemoryRegistrationStore()


@pytest.fixture
def event_service(event_store, registration_store, clock) -> EventService:
    return EventService(event_store, registration_store, clock=clock)


@pytest.fixture
def registration_service(event_store, registration_store, clock) -> RegistrationService:
    return RegistrationService(event_store, registration_store, clock=clock)


@pytest.fixture
def identity() -> UserIdentity:
    return UserIdentity(user_id="user-1", display_name="Ada Lovelace", email="ada@example.edu")


@pytest.fixture
def member(django_user_model):
    return django_user_model.objects.create_user(
        username="ada",
        password="pw",
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.edu",
    )


@pytest.fixture
def staff(django_user_model):
    return django_user_model.objects.create_user(username="admin", password="pw", is_staff=True)
