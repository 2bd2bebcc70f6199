"""Cache keys for the event catalog and their invalidation."""

from django.conf import settings
from django.core.cache import cache

EVENTS_LIST_KEY = "events:list"


def event_detail_key(event_id) -> str:
    return f"events:{event_id}"


def cache_timeout() -> int:
    return getattr(settings, "EVENTS_CACHE_TIMEOUT", 60)


def invalidate_event(event_id) -> None:
    """Drop the list and detail entries for an event."""
    cache.delete_many([EVENTS_LIST_KEY, event_detail_key(event_id)])
