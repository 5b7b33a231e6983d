"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from uuid import UUID

import pytest

from events.domain import EventId, RegistrationId, UserIdentity
from events.domain.errors import AlreadyRegisteredError, ErrorCode, EventNotFoundError
from tests.factories import EVENT_UUID, make_event


class TestEventId:
    """Tests for EventId value object."""

    def test_from_string_valid_uuid(self):
        """EventId.from_string parses valid UUID."""
        assert EventId.from_string(EVENT_UUID).value == UUID(EVENT_UUID)

    def test_from_string_invalid_uuid(self):
        """EventId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")

    def test_str_is_canonical_uuid(self):
        assert str(EventId.from_string(EVENT_UUID.upper())) == EVENT_UUID

    def test_generate_is_unique(self):
        assert EventId.generate() != EventId.generate()


class TestRegistrationId:
    def test_from_string_valid_uuid(self):
        assert RegistrationId.from_string(EVENT_UUID).value == UUID(EVENT_UUID)


class TestEventDisplayDefaults:
    """Optional display fields fall back to TBA."""

    def test_missing_time_and_location_are_tba(self):
        event = make_event()
        assert event.display_time == "TBA"
        assert event.display_location == "TBA"

    def test_blank_time_is_tba(self):
        assert make_event(time="  ").display_time == "TBA"

    def test_present_values_are_used(self):
        event = make_event(time="18:30", location="Lab 3")
        assert event.display_time == "18:30"
        assert event.display_location == "Lab 3"


class TestUserIdentity:
    def test_display_name_joins_first_and_last(self):
        identity = UserIdentity.from_names("7", "Grace", "Hopper", "grace@example.edu")
        assert identity.display_name == "Grace Hopper"
        assert identity.email == "grace@example.edu"

    def test_missing_names_fall_back_to_anonymous(self):
        identity = UserIdentity.from_names("7", "", None, None)
        assert identity.display_name == "Anonymous User"
        assert identity.email == ""


class TestDomainErrors:
    def test_str_includes_code(self):
        assert str(EventNotFoundError("x")) == "EVENT_NOT_FOUND: Event not found"

    def test_already_registered_keeps_pair(self):
        error = AlreadyRegisteredError("event-1", "user-1")
        assert error.code is ErrorCode.ALREADY_REGISTERED
        assert (error.event_id, error.user_id) == ("event-1", "user-1")
