from django.contrib import admin

from events.models import Event, Registration


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "date", "registration", "location", "registrant_count"]
    search_fields = ["title", "description", "location"]
    ordering = ["-date"]
    readonly_fields = ["registrants"]

    @admin.display(description="Registrants")
    def registrant_count(self, obj: Event) -> int:
        return Registration.objects.filter(event_id=obj.pk).count()

    @admin.display(description="Registered users")
    def registrants(self, obj: Event) -> str:
        rows = Registration.objects.filter(event_id=obj.pk).order_by("registered_at")
        return ", ".join(f"{row.user_name} <{row.user_email}>" for row in rows) or "-"


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["user_name", "user_email", "event_id", "registered_at"]
    search_fields = ["user_name", "user_email", "user_id"]
    list_filter = ["registered_at"]
    readonly_fields = [
        "event_id",
        "user_id",
        "user_name",
        "user_email",
        "registered_at",
    ]

    def has_add_permission(self, request) -> bool:
        return False
