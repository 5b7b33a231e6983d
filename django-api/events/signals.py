"""Django signals for cache invalidation."""

import logging

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from events.cache_keys import EVENT_LIST_KEY, event_key, event_registrations_key
from events.domain import EventId
from events.models import Event, Registration

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    event_id = EventId(value=instance.pk)
    cache.delete_many([EVENT_LIST_KEY, event_key(event_id)])
    logger.debug("Invalidated event caches for %s", event_id)


@receiver([post_save, post_delete], sender=Registration)
def invalidate_registration_cache(sender, instance, **kwargs):
    """Invalidate the registrant list when a registration is saved or deleted."""
    cache.delete(event_registrations_key(EventId(value=instance.event_id)))
