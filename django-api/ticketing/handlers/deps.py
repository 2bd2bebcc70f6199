"""Service construction for the HTTP handlers."""

from django.conf import settings

from ticketing.services.booking_service import BookingService
from ticketing.services.event_service import EventService
from ticketing.services.ticket_service import TicketService
from ticketing.stores.django_store import (
    DjangoBookingStore,
    DjangoEventStore,
    DjangoUnitOfWork,
)


def get_event_service() -> EventService:
    return EventService(DjangoEventStore())


def get_booking_service() -> BookingService:
    return BookingService(
        DjangoEventStore(),
        DjangoBookingStore(),
        DjangoUnitOfWork(),
        reference_prefix=settings.TICKETING_REFERENCE_PREFIX,
    )


def get_ticket_service() -> TicketService:
    return TicketService(DjangoEventStore(), DjangoBookingStore(), DjangoUnitOfWork())


def requester_id(request) -> str:
    """Id of the authenticated user, as supplied by DRF authentication."""
    return str(request.user.pk)
