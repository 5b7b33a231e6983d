"""Unit tests for the per-user registration cache.

Run with: pytest tests/test_registration_cache.py -v
"""

import pytest

from events.services.registration_cache import RegistrationCache


class RecordingLoader:
    def __init__(self, data: dict[str, list[str]]) -> None:
        self.data = data
        self.calls: list[str] = []

    def __call__(self, user_id: str) -> list[str]:
        self.calls.append(user_id)
        return list(self.data.get(user_id, []))


class TestRegistrationCache:
    """Tests for loading, refreshing and optimistic inserts."""

    def test_unloaded_user_is_not_registered(self):
        """contains is False before the first load and does not trigger one."""
        loader = RecordingLoader({"u1": ["e1"]})
        cache = RegistrationCache(loader)
        assert cache.contains("u1", "e1") is False
        assert loader.calls == []

    def test_ensure_loaded_loads_once(self):
        loader = RecordingLoader({"u1": ["e1"]})
        cache = RegistrationCache(loader)
        cache.ensure_loaded("u1")
        cache.ensure_loaded("u1")
        assert loader.calls == ["u1"]
        assert cache.is_loaded("u1")
        assert cache.contains("u1", "e1")

    def test_refresh_always_refetches(self):
        """Regaining visibility picks up registrations made elsewhere."""
        loader = RecordingLoader({"u1": ["e1"]})
        cache = RegistrationCache(loader)
        cache.ensure_loaded("u1")
        loader.data["u1"].append("e2")
        cache.refresh("u1")
        assert loader.calls == ["u1", "u1"]
        assert cache.contains("u1", "e2")

    def test_refresh_returns_ids_in_load_order(self):
        cache = RegistrationCache(RecordingLoader({"u1": ["e2", "e1"]}))
        assert cache.refresh("u1") == ["e2", "e1"]

    def test_record_is_visible_without_fetch(self):
        loader = RecordingLoader({})
        cache = RegistrationCache(loader)
        cache.record("u1", "e1")
        assert cache.contains("u1", "e1")
        assert loader.calls == []

    def test_record_does_not_count_as_load(self):
        loader = RecordingLoader({"u1": ["e0", "e1"]})
        cache = RegistrationCache(loader)
        cache.record("u1", "e1")
        assert not cache.is_loaded("u1")
        cache.ensure_loaded("u1")
        assert cache.contains("u1", "e0")

    def test_users_are_isolated(self):
        cache = RegistrationCache(RecordingLoader({"u1": ["e1"]}))
        cache.ensure_loaded("u1")
        cache.ensure_loaded("u2")
        assert not cache.contains("u2", "e1")

    def test_failed_refresh_keeps_previous_entry(self):
        loader = RecordingLoader({"u1": ["e1"]})
        cache = RegistrationCache(loader)
        cache.ensure_loaded("u1")

        def broken(user_id):
            raise RuntimeError("backend down")

        cache._loader = broken
        with pytest.raises(RuntimeError):
            cache.refresh("u1")
        assert cache.contains("u1", "e1")
