"""Serializers for request validation and for shaping domain models into responses."""

from rest_framework import serializers

from events.domain import EventFields, StatusFilter


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model.

    Expects ``event_service`` and ``now`` in the context. ``registered_ids``
    is optional and holds the event IDs the caller is registered for.
    """

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    date = serializers.DateTimeField()
    registration = serializers.DateTimeField(allow_null=True)
    time = serializers.CharField(allow_null=True)
    display_time = serializers.CharField()
    location = serializers.CharField(allow_null=True)
    display_location = serializers.CharField()
    image_ref = serializers.CharField(allow_null=True)
    status = serializers.SerializerMethodField()
    status_label = serializers.SerializerMethodField()
    is_registered = serializers.SerializerMethodField()

    def _status(self, obj):
        return self.context["event_service"].status_of(obj, self.context["now"])

    def get_status(self, obj) -> str:
        return self._status(obj).value

    def get_status_label(self, obj) -> str:
        return self._status(obj).label

    def get_is_registered(self, obj) -> bool:
        return str(obj.id) in self.context.get("registered_ids", ())


class EventInputSerializer(serializers.Serializer):
    """Validates admin-supplied event fields."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True, default="")
    date = serializers.DateTimeField()
    registration = serializers.DateTimeField(
        required=False, allow_null=True, default=None
    )
    time = serializers.CharField(
        max_length=32, required=False, allow_null=True, allow_blank=True, default=None
    )
    location = serializers.CharField(
        max_length=255, required=False, allow_null=True, allow_blank=True, default=None
    )
    image_ref = serializers.CharField(
        max_length=500, required=False, allow_null=True, allow_blank=True, default=None
    )

    def to_fields(self, base: dict | None = None) -> EventFields:
        """Build EventFields from validated data layered over ``base``."""
        data = dict(base or {})
        data.update(self.validated_data)
        return EventFields(
            title=data["title"],
            description=data.get("description") or "",
            date=data["date"],
            registration=data.get("registration"),
            time=data.get("time") or None,
            location=data.get("location") or None,
            image_ref=data.get("image_ref") or None,
        )


class EventQuerySerializer(serializers.Serializer):
    """Validates event list query parameters."""

    status = serializers.ChoiceField(
        choices=[choice.value for choice in StatusFilter],
        default=StatusFilter.ALL.value,
    )
    search = serializers.CharField(required=False, allow_blank=True, default="")
    sort = serializers.ChoiceField(choices=["date", "title"], default="date")
    order = serializers.ChoiceField(choices=["asc", "desc"], default="desc")


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    id = serializers.UUIDField(source="id.value")
    event_id = serializers.UUIDField(source="event_id.value")
    user_id = serializers.CharField()
    user_name = serializers.CharField()
    user_email = serializers.CharField()
    registered_at = serializers.DateTimeField()
