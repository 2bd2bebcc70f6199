"""Ticket service - check-in by reference code.

A confirmed ticket is redeemed at most once. The status change is a
compare-and-set from CONFIRMED, so of several concurrent scans of the
same code exactly one gets a receipt.
"""

import logging

from ticketing.domain import BookingStatus, RedemptionReceipt, TicketPayload
from ticketing.domain.errors import InvalidReferenceError, TransientStoreError
from ticketing.services.booking_service import owned_booking
from ticketing.services.event_service import Clock, utc_now
from ticketing.stores.interfaces import BookingStore, EventStore, UnitOfWork

logger = logging.getLogger(__name__)


class TicketService:
    """Service for ticket redemption and ticket payloads."""

    def __init__(
        self,
        events: EventStore,
        bookings: BookingStore,
        uow: UnitOfWork,
        clock: Clock = utc_now,
    ) -> None:
        self._events = events
        self._bookings = bookings
        self._uow = uow
        self._clock = clock

    def redeem(self, reference_code: str) -> RedemptionReceipt:
        """Check in the ticket carrying this reference code.

        Raises:
            InvalidReferenceError: If no booking has this code.
            TicketCancelledError: If the booking was cancelled.
            AlreadyRedeemedError: If the ticket was already used.
            TransientStoreError: If the store failed; nothing was applied.
        """
        if not reference_code:
            raise InvalidReferenceError()

        with self._uow.atomic():
            found = self._bookings.find_by_reference(reference_code)
            if found is None:
                logger.info("Check-in rejected: unknown reference code")
                raise InvalidReferenceError()
            booking = self._bookings.lock_booking(found.id)
            if booking is None:
                raise InvalidReferenceError()

            now = self._clock()
            used = booking.redeem(now)
            if not self._bookings.transition(used, from_status=BookingStatus.CONFIRMED):
                current = self._bookings.get_booking(booking.id)
                if current is not None:
                    current.redeem(now)
                raise TransientStoreError()

        logger.info(
            "Booking %s checked in: event=%s seats=%d ref=%s",
            used.id,
            used.event_id,
            used.number_of_seats.value,
            used.reference_code.masked(),
        )
        return RedemptionReceipt(
            booking_id=used.id,
            event_id=used.event_id,
            number_of_seats=used.number_of_seats.value,
            checked_in_at=now,
        )

    def ticket_payload(self, booking_id: str, requester_id: str) -> TicketPayload:
        """Return the data printed into the requester's ticket QR code.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
            BookingForbiddenError: If the requester does not own the booking.
        """
        booking = owned_booking(self._bookings, booking_id, requester_id)
        event = self._events.get_event(booking.event_id)
        return TicketPayload(
            booking_id=booking.id,
            reference_code=booking.reference_code,
            event_title=event.title if event else "",
            seats=booking.number_of_seats.value,
            status=booking.status,
        )
