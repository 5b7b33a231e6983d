"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models
from django.utils import timezone


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    date = models.DateTimeField()
    registration = models.DateTimeField(blank=True, null=True)
    time = models.CharField(max_length=32, blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    image_ref = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["-date"], name="event_date_desc_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Registration(models.Model):
    """Persistence model for event registrations.

    ``event_id`` is a plain column rather than a foreign key: deleting an
    event never deletes its registrations implicitly.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(db_index=True)
    user_id = models.CharField(max_length=255, db_index=True)
    user_name = models.CharField(max_length=255)
    user_email = models.CharField(max_length=255, blank=True)
    registered_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["registered_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["event_id", "user_id"], name="unique_registration_per_user"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_name} - {self.event_id}"
