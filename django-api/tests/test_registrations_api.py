"""Integration tests for the registration endpoints.

Run with: pytest tests/test_registrations_api.py -v
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from django.core.cache import cache
from django.db import OperationalError
from django.test import override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from events import models
from events.cache_keys import event_key
from tests.factories import create_event


@pytest.mark.django_db
class TestRegister:
    """Tests for POST /api/events/{id}/registration"""

    def test_register_creates_registration(self, api_client: APIClient, member):
        event = create_event()
        api_client.force_authenticate(member)
        response = api_client.post(f"/api/events/{event.pk}/registration")
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Successfully registered for the event"
        assert body["registration"]["event_id"] == str(event.pk)
        assert body["registration"]["user_name"] == "Ada Lovelace"
        assert body["registration"]["user_email"] == "ada@example.edu"

    def test_register_twice_conflicts(self, api_client: APIClient, member):
        event = create_event()
        api_client.force_authenticate(member)
        api_client.post(f"/api/events/{event.pk}/registration")
        response = api_client.post(f"/api/events/{event.pk}/registration")
        assert response.status_code == 409
        assert response.json()["error"] == {
            "code": "ALREADY_REGISTERED",
            "message": "You are already registered for this event",
        }
        assert models.Registration.objects.filter(event_id=event.pk).count() == 1

    def test_register_anonymous_is_unauthorized(self, api_client: APIClient):
        event = create_event()
        response = api_client.post(f"/api/events/{event.pk}/registration")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"
        assert models.Registration.objects.count() == 0

    def test_register_completed_event_conflicts(self, api_client: APIClient, member):
        now = timezone.now()
        event = create_event(
            date=now - timedelta(hours=1), registration=now - timedelta(days=2)
        )
        api_client.force_authenticate(member)
        response = api_client.post(f"/api/events/{event.pk}/registration")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EVENT_COMPLETED"
        assert models.Registration.objects.count() == 0

    def test_register_unknown_event(self, api_client: APIClient, member):
        api_client.force_authenticate(member)
        response = api_client.post(f"/api/events/{uuid4()}/registration")
        assert response.status_code == 404

    def test_register_invalid_event_id(self, api_client: APIClient, member):
        api_client.force_authenticate(member)
        response = api_client.post("/api/events/123/registration")
        assert response.status_code == 400

    def test_register_ignores_stale_cached_event(self, api_client: APIClient, member):
        """An event completed behind the cache's back still rejects registration."""
        event = create_event()
        assert api_client.get(f"/api/events/{event.pk}").json()["status"] == "ongoing"
        assert cache.get(event_key(event.pk)) is not None

        # QuerySet.update() skips post_save, so the cached copy stays stale.
        models.Event.objects.filter(pk=event.pk).update(
            date=timezone.now() - timedelta(hours=1)
        )
        api_client.force_authenticate(member)
        response = api_client.post(f"/api/events/{event.pk}/registration")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EVENT_COMPLETED"
        assert models.Registration.objects.count() == 0

    def test_register_ignores_stale_cached_deleted_event(
        self, api_client: APIClient, member
    ):
        """A deleted event lingering in another worker's cache is not found."""
        event = create_event()
        api_client.get(f"/api/events/{event.pk}")
        stale = cache.get(event_key(event.pk))
        event.delete()
        cache.set(event_key(event.pk), stale)

        api_client.force_authenticate(member)
        response = api_client.post(f"/api/events/{event.pk}/registration")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "EVENT_NOT_FOUND"
        assert models.Registration.objects.count() == 0

    def test_register_storage_unavailable(
        self, api_client: APIClient, member, monkeypatch
    ):
        event = create_event()

        def unavailable(*args, **kwargs):
            raise OperationalError("database is locked")

        monkeypatch.setattr(models.Registration.objects, "filter", unavailable)
        api_client.force_authenticate(member)
        response = api_client.post(f"/api/events/{event.pk}/registration")
        assert response.status_code == 503
        assert response.json()["error"] == {
            "code": "STORAGE_UNAVAILABLE",
            "message": "The service is temporarily unavailable, please try again",
        }
        assert models.Registration.objects.count() == 0


@pytest.mark.django_db
class TestRegistrationStatus:
    """Tests for GET /api/events/{id}/registration and /api/registrations/me"""

    def test_is_registered_after_register(self, api_client: APIClient, member):
        event = create_event()
        api_client.force_authenticate(member)
        url = f"/api/events/{event.pk}/registration"
        assert api_client.get(url).json() == {"is_registered": False}
        api_client.post(url)
        assert api_client.get(url).json() == {"is_registered": True}

    def test_is_registered_requires_authentication(self, api_client: APIClient):
        event = create_event()
        assert api_client.get(f"/api/events/{event.pk}/registration").status_code == 401

    def test_my_registrations(self, api_client: APIClient, member):
        first = create_event(title="First")
        second = create_event(title="Second")
        api_client.force_authenticate(member)
        api_client.post(f"/api/events/{second.pk}/registration")
        api_client.post(f"/api/events/{first.pk}/registration")
        body = api_client.get("/api/registrations/me").json()
        assert body == {"registered_events": [str(second.pk), str(first.pk)]}

    def test_my_registrations_refetches_rows_written_elsewhere(
        self, api_client: APIClient, member
    ):
        """Regaining visibility shows registrations made in another session."""
        event = create_event()
        api_client.force_authenticate(member)
        body = api_client.get("/api/registrations/me").json()
        assert body == {"registered_events": []}
        models.Registration.objects.create(
            event_id=event.pk, user_id=str(member.pk), user_name="Ada Lovelace"
        )
        body = api_client.get("/api/registrations/me").json()
        assert body == {"registered_events": [str(event.pk)]}

    @override_settings(EVENTS_ORPHANED_REGISTRATION_POLICY="hide")
    def test_my_registrations_hides_deleted_events(self, api_client: APIClient, member):
        event = create_event()
        api_client.force_authenticate(member)
        api_client.post(f"/api/events/{event.pk}/registration")
        event.delete()
        body = api_client.get("/api/registrations/me").json()
        assert body == {"registered_events": []}
        assert models.Registration.objects.count() == 1

    def test_my_registrations_requires_authentication(self, api_client: APIClient):
        assert api_client.get("/api/registrations/me").status_code == 401


@pytest.mark.django_db
class TestRegistrants:
    """Tests for GET /api/events/{id}/registrations"""

    def test_staff_sees_registrants(self, api_client: APIClient, member, staff):
        event = create_event()
        api_client.force_authenticate(member)
        api_client.post(f"/api/events/{event.pk}/registration")

        api_client.force_authenticate(staff)
        body = api_client.get(f"/api/events/{event.pk}/registrations").json()
        assert body["count"] == 1
        assert body["results"][0]["user_email"] == "ada@example.edu"

    def test_members_cannot_see_registrants(self, api_client: APIClient, member):
        event = create_event()
        api_client.force_authenticate(member)
        response = api_client.get(f"/api/events/{event.pk}/registrations")
        assert response.status_code == 403

    def test_registrants_unknown_event(self, api_client: APIClient, staff):
        api_client.force_authenticate(staff)
        assert api_client.get(f"/api/events/{uuid4()}/registrations").status_code == 404
