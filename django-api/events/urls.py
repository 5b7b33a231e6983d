from django.urls import path

from events.handlers import (
    EventDetailView,
    EventListView,
    EventRegistrantsView,
    EventRegistrationView,
    MyRegistrationsView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/registration",
        EventRegistrationView.as_view(),
        name="event-registration",
    ),
    path(
        "events/<str:event_id>/registrations",
        EventRegistrantsView.as_view(),
        name="event-registrants",
    ),
    path("registrations/me", MyRegistrationsView.as_view(), name="my-registrations"),
]
