"""Per-user index of registered event IDs.

The cache is a projection of stored registrations for one user. It is never
the source of truth for duplicate checks; the registration store is.
"""

import logging
import threading
from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

RegistrationLoader = Callable[[str], Iterable[str]]


class RegistrationCache:
    """Maps ``user_id`` to the set of event IDs the user is registered for.

    Populated through ``loader`` when a consuming view mounts
    (``ensure_loaded``) and when a session regains visibility (``refresh``),
    and updated in place after a successful registration (``record``).
    A recorded event is visible to ``contains`` even before the user's
    first load; it does not count as a load.
    """

    def __init__(self, loader: RegistrationLoader) -> None:
        self._loader = loader
        self._entries: dict[str, set[str]] = {}
        self._loaded: set[str] = set()
        self._lock = threading.Lock()

    def is_loaded(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._loaded

    def ensure_loaded(self, user_id: str) -> None:
        if not self.is_loaded(user_id):
            self.refresh(user_id)

    def refresh(self, user_id: str) -> list[str]:
        """Replace the user's entry with a fresh load and return the loaded IDs."""
        # Load outside the lock; a failing loader leaves the old entry in place.
        event_ids = list(self._loader(user_id))
        with self._lock:
            self._entries[user_id] = set(event_ids)
            self._loaded.add(user_id)
        logger.debug(
            "Registration cache refreshed for user %s: %d events",
            user_id,
            len(event_ids),
        )
        return event_ids

    def record(self, user_id: str, event_id: str) -> None:
        with self._lock:
            self._entries.setdefault(user_id, set()).add(event_id)

    def contains(self, user_id: str, event_id: str) -> bool:
        with self._lock:
            event_ids = self._entries.get(user_id)
            return event_ids is not None and event_id in event_ids
