from events.handlers.views import (
    EventDetailView,
    EventListView,
    EventRegistrantsView,
    EventRegistrationView,
    MyRegistrationsView,
)

__all__ = [
    "EventListView",
    "EventDetailView",
    "EventRegistrationView",
    "EventRegistrantsView",
    "MyRegistrationsView",
]
