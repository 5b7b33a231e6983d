"""Typed, validated events settings.

Values come from ``EVENTS_*`` environment variables (or a ``.env`` file).
A Django setting with the same name takes precedence, so deployments and
tests can pin a value in ``settings.py`` or with ``override_settings``.
"""

from django.conf import settings
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from events.domain.status import MissingRegistrationPolicy
from events.services.event_service import OrphanedRegistrationPolicy

ENV_PREFIX = "EVENTS_"


class EventsSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, env_file=".env", extra="ignore", frozen=True
    )

    cache_timeout: int = Field(300, ge=0)
    page_size: int = Field(20, ge=1)
    missing_registration_policy: MissingRegistrationPolicy = (
        MissingRegistrationPolicy.UPCOMING_UNTIL_DATE
    )
    orphaned_registration_policy: OrphanedRegistrationPolicy = (
        OrphanedRegistrationPolicy.KEEP
    )


def events_settings() -> EventsSettings:
    """Build the events settings.

    Raises:
        pydantic.ValidationError: On an unknown policy name or an
            out-of-range number, e.g. a page size below 1.
    """
    overrides = {}
    for name in EventsSettings.model_fields:
        key = f"{ENV_PREFIX}{name.upper()}"
        if hasattr(settings, key):
            overrides[name] = getattr(settings, key)
    return EventsSettings(**overrides)
