"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.conf import events_settings
from events.domain import Event, StatusFilter
from events.domain.errors import DomainError, ErrorCode, NotAuthenticatedError
from events.handlers.auth import identity_from_request
from events.handlers.serializers import (
    EventInputSerializer,
    EventQuerySerializer,
    EventSerializer,
    RegistrationSerializer,
)
from events.services.event_service import EventService
from events.services.registration_service import RegistrationService
from events.stores.cached_store import CachedEventStore, CachedRegistrationStore
from events.stores.django_store import DjangoEventStore, DjangoRegistrationStore

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT_DATA: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_COMPLETED: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCode.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=STATUS_BY_CODE[error.code],
    )


def validation_error_response(errors) -> Response:
    return Response(
        {
            "error": {
                "code": ErrorCode.INVALID_EVENT_DATA.value,
                "message": "Invalid request data",
                "details": errors,
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def build_services() -> tuple[EventService, RegistrationService]:
    """Wire services to the Django stores for one request.

    Catalog reads go through the event cache. Registration checks read
    events from the database, so a stale cached event never lets a user
    register for a completed or deleted event.
    """
    conf = events_settings()
    registration_store = CachedRegistrationStore(
        DjangoRegistrationStore(), conf.cache_timeout
    )
    event_service = EventService(
        CachedEventStore(DjangoEventStore(), conf.cache_timeout),
        registration_store,
        clock=timezone.now,
        missing_registration=conf.missing_registration_policy,
        orphaned_registrations=conf.orphaned_registration_policy,
    )
    registration_service = RegistrationService(
        DjangoEventStore(),
        registration_store,
        clock=timezone.now,
        missing_registration=conf.missing_registration_policy,
        orphaned_registrations=conf.orphaned_registration_policy,
    )
    return event_service, registration_service


class EventPagination(PageNumberPagination):
    page_size_query_param = "page_size"
    max_page_size = 100

    def __init__(self) -> None:
        self.page_size = events_settings().page_size


class StaffWritesMixin:
    """Reads are public, writes require a staff user."""

    def get_permissions(self):
        if self.request.method in ("GET", "HEAD", "OPTIONS"):
            return [AllowAny()]
        return [IsAdminUser()]


def _event_context(
    event_service, registration_service, request, events: list[Event]
) -> dict:
    context = {
        "event_service": event_service,
        "now": timezone.now(),
        "request": request,
    }
    identity = identity_from_request(request)
    if identity is not None:
        registration_service.load_registrations(identity.user_id)
        context["registered_ids"] = {
            str(event.id)
            for event in events
            if registration_service.is_registered(str(event.id), identity.user_id)
        }
    return context


class EventListView(StaffWritesMixin, APIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        query = EventQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)
        params = query.validated_data

        event_service, registration_service = build_services()
        try:
            events = event_service.list_events(
                status=StatusFilter(params["status"]),
                search=params["search"],
                sort_by=params["sort"],
                ascending=params["order"] == "asc",
            )
            paginator = EventPagination()
            page = paginator.paginate_queryset(events, request, view=self)
            context = _event_context(event_service, registration_service, request, page)
        except DomainError as error:
            return error_response(error)
        data = EventSerializer(page, many=True, context=context).data
        return paginator.get_paginated_response(data)

    def post(self, request: Request) -> Response:
        serializer = EventInputSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        event_service, _ = build_services()
        try:
            event = event_service.create_event(serializer.to_fields())
        except DomainError as error:
            return error_response(error)
        context = {"event_service": event_service, "now": timezone.now()}
        return Response(
            EventSerializer(event, context=context).data,
            status=status.HTTP_201_CREATED,
        )


class EventDetailView(StaffWritesMixin, APIView):
    """Handler for GET/PUT/PATCH/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event_service, registration_service = build_services()
        try:
            event = event_service.get_event(event_id)
            context = _event_context(
                event_service, registration_service, request, [event]
            )
        except DomainError as error:
            return error_response(error)
        return Response(EventSerializer(event, context=context).data)

    def put(self, request: Request, event_id: str) -> Response:
        return self._update(request, event_id, partial=False)

    def patch(self, request: Request, event_id: str) -> Response:
        return self._update(request, event_id, partial=True)

    def delete(self, request: Request, event_id: str) -> Response:
        event_service, _ = build_services()
        try:
            event_service.delete_event(event_id)
        except DomainError as error:
            return error_response(error)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request: Request, event_id: str, partial: bool) -> Response:
        serializer = EventInputSerializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        event_service, _ = build_services()
        try:
            base = None
            if partial:
                current = event_service.get_event(event_id)
                base = {
                    "title": current.title,
                    "description": current.description,
                    "date": current.date,
                    "registration": current.registration,
                    "time": current.time,
                    "location": current.location,
                    "image_ref": current.image_ref,
                }
            event = event_service.update_event(event_id, serializer.to_fields(base))
        except DomainError as error:
            return error_response(error)
        context = {"event_service": event_service, "now": timezone.now()}
        return Response(EventSerializer(event, context=context).data)


class EventRegistrationView(APIView):
    """Handler for GET/POST /api/events/{event_id}/registration"""

    permission_classes = [AllowAny]

    def get(self, request: Request, event_id: str) -> Response:
        _, registration_service = build_services()
        identity = identity_from_request(request)
        try:
            if identity is None:
                raise NotAuthenticatedError()
            registration_service.load_registrations(identity.user_id)
        except DomainError as error:
            return error_response(error)
        registered = registration_service.is_registered(event_id, identity.user_id)
        return Response({"is_registered": registered})

    def post(self, request: Request, event_id: str) -> Response:
        _, registration_service = build_services()
        try:
            registration = registration_service.register(
                event_id, identity_from_request(request)
            )
        except DomainError as error:
            logger.info("Registration for event %s rejected: %s", event_id, error)
            return error_response(error)
        return Response(
            {
                "message": "Successfully registered for the event",
                "registration": RegistrationSerializer(registration).data,
            },
            status=status.HTTP_201_CREATED,
        )


class EventRegistrantsView(APIView):
    """Handler for GET /api/events/{event_id}/registrations"""

    permission_classes = [IsAdminUser]

    def get(self, request: Request, event_id: str) -> Response:
        _, registration_service = build_services()
        try:
            registrants = registration_service.list_registrants(event_id)
        except DomainError as error:
            return error_response(error)
        return Response(
            {
                "count": len(registrants),
                "results": RegistrationSerializer(registrants, many=True).data,
            }
        )


class MyRegistrationsView(APIView):
    """Handler for GET /api/registrations/me

    Clients call this when a session regains visibility; it re-fetches the
    caller's registrations even if they were loaded before.
    """

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        _, registration_service = build_services()
        identity = identity_from_request(request)
        try:
            if identity is None:
                raise NotAuthenticatedError()
            event_ids = registration_service.refresh_registrations(identity.user_id)
        except DomainError as error:
            return error_response(error)
        return Response({"registered_events": event_ids})
