"""Cache keys shared by the cached stores and the invalidation signals."""

EVENT_LIST_KEY = "events:list"


def event_key(event_id) -> str:
    return f"events:{event_id}"


def event_registrations_key(event_id) -> str:
    return f"events:{event_id}:registrations"
