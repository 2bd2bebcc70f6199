"""Booking service - the seat ledger.

Creating a booking debits seats from its event and cancelling one credits
them back. Each operation runs in one unit of work with the event (or
booking) row locked, and the seat write itself is conditional, so the
event never goes below zero or above its total.
"""

import logging

from ticketing.domain import Booking, BookingId, BookingStatus, SeatCount
from ticketing.domain.errors import (
    BookingForbiddenError,
    BookingNotFoundError,
    EventNotFoundError,
    InsufficientInventoryError,
    InvalidBookingIdError,
    InvalidSeatCountError,
    TransientStoreError,
)
from ticketing.services.event_service import Clock, parse_event_id, utc_now
from ticketing.stores.interfaces import BookingStore, EventStore, UnitOfWork

logger = logging.getLogger(__name__)


def parse_booking_id(booking_id: str) -> BookingId:
    try:
        return BookingId.from_string(str(booking_id))
    except ValueError as exc:
        raise InvalidBookingIdError() from exc


def owned_booking(store: BookingStore, booking_id: str, requester_id: str) -> Booking:
    booking = store.get_booking(parse_booking_id(booking_id))
    if booking is None:
        raise BookingNotFoundError(booking_id)
    if not booking.is_owned_by(requester_id):
        raise BookingForbiddenError()
    return booking


class BookingService:
    """Service for booking creation, cancellation and lookup."""

    def __init__(
        self,
        events: EventStore,
        bookings: BookingStore,
        uow: UnitOfWork,
        clock: Clock = utc_now,
        reference_prefix: str = "BK",
    ) -> None:
        self._events = events
        self._bookings = bookings
        self._uow = uow
        self._clock = clock
        self._reference_prefix = reference_prefix

    def create_booking(
        self, event_id: str, requester_id: str, number_of_seats: int
    ) -> Booking:
        """Reserve seats on an event for the requester.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            InvalidSeatCountError: If fewer than one seat is requested.
            EventNotFoundError: If the event does not exist.
            InsufficientInventoryError: If the event has fewer seats left.
            TransientStoreError: If the store failed; nothing was applied.
        """
        event_key = parse_event_id(event_id)
        try:
            seats = SeatCount(number_of_seats)
        except ValueError as exc:
            raise InvalidSeatCountError() from exc

        with self._uow.atomic():
            event = self._events.lock_event(event_key)
            if event is None:
                raise EventNotFoundError(event_id)
            if event.available_seats.value < seats.value:
                logger.info(
                    "Booking rejected for event %s: requested %d, available %d",
                    event_key,
                    seats.value,
                    event.available_seats.value,
                )
                raise InsufficientInventoryError(event.available_seats.value)

            booking = Booking.new(
                event=event,
                user_id=requester_id,
                number_of_seats=seats,
                booked_at=self._clock(),
                reference_prefix=self._reference_prefix,
            )
            self._bookings.add_booking(booking)
            if not self._events.debit_seats(event_key, seats.value):
                # Raising inside the scope discards the booking row too.
                current = self._events.get_event(event_key)
                available = current.available_seats.value if current else 0
                logger.info(
                    "Booking rejected for event %s after debit conflict, available %d",
                    event_key,
                    available,
                )
                raise InsufficientInventoryError(available)

        logger.info(
            "Booking %s created: event=%s user=%s seats=%d ref=%s",
            booking.id,
            event_key,
            requester_id,
            seats.value,
            booking.reference_code.masked(),
        )
        return booking

    def cancel_booking(self, booking_id: str, requester_id: str) -> Booking:
        """Cancel the requester's booking and return its seats to the event.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
            BookingForbiddenError: If the requester does not own the booking.
            AlreadyCancelledError: If the booking is already cancelled.
            TicketUsedError: If the ticket was already checked in.
            TransientStoreError: If the store failed; nothing was applied.
        """
        booking_key = parse_booking_id(booking_id)

        with self._uow.atomic():
            booking = self._bookings.lock_booking(booking_key)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            if not booking.is_owned_by(requester_id):
                logger.warning(
                    "User %s attempted to cancel booking %s owned by another user",
                    requester_id,
                    booking_key,
                )
                raise BookingForbiddenError()

            now = self._clock()
            cancelled = booking.cancel(now)
            if not self._bookings.transition(cancelled, from_status=BookingStatus.CONFIRMED):
                current = self._bookings.get_booking(booking_key)
                if current is not None:
                    current.cancel(now)
                raise TransientStoreError()

            if not self._events.credit_seats(booking.event_id, booking.number_of_seats.value):
                logger.warning(
                    "Seats for booking %s not restored: event %s no longer exists",
                    booking_key,
                    booking.event_id,
                )

        logger.info(
            "Booking %s cancelled: event=%s seats=%d",
            booking_key,
            booking.event_id,
            booking.number_of_seats.value,
        )
        return cancelled

    def get_booking(self, booking_id: str, requester_id: str) -> Booking:
        """Return one of the requester's bookings.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
            BookingForbiddenError: If the requester does not own the booking.
        """
        return owned_booking(self._bookings, booking_id, requester_id)

    def list_bookings(self, requester_id: str) -> list[Booking]:
        """Return the requester's bookings, most recent first."""
        return self._bookings.list_for_user(requester_id)
