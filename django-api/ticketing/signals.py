"""Django signals for cache invalidation.

Seat changes made by the booking service use queryset updates, which do
not fire these signals; the Django store invalidates on commit instead.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from ticketing.cache import invalidate_event
from ticketing.models import Event


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    invalidate_event(instance.pk)
