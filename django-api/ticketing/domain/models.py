"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in ticketing/models.py (persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Self

from ticketing.domain.errors import (
    AlreadyCancelledError,
    AlreadyRedeemedError,
    TicketCancelledError,
    TicketUsedError,
)
from ticketing.domain.value_objects import (
    BookingId,
    Capacity,
    EventId,
    Money,
    ReferenceCode,
    SeatCount,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event and its seat inventory."""

    id: EventId
    title: str
    description: str
    venue: str
    starts_at: datetime
    total_seats: Capacity
    available_seats: Capacity
    ticket_price: Money
    created_at: datetime

    def __post_init__(self) -> None:
        if self.total_seats.value < 1:
            raise ValueError("Total seats must be at least 1")
        if self.available_seats.value > self.total_seats.value:
            raise ValueError("Available seats cannot exceed total seats")

    @classmethod
    def new(
        cls,
        *,
        title: str,
        description: str,
        venue: str,
        starts_at: datetime,
        total_seats: int,
        ticket_price: Money,
        created_at: datetime,
    ) -> Self:
        return cls(
            id=EventId.new(),
            title=title,
            description=description,
            venue=venue,
            starts_at=starts_at,
            total_seats=Capacity(total_seats),
            available_seats=Capacity(total_seats),
            ticket_price=ticket_price,
            created_at=created_at,
        )

    @property
    def seats_sold(self) -> int:
        return self.total_seats.value - self.available_seats.value


class BookingStatus(Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    USED = "used"

    @property
    def is_terminal(self) -> bool:
        return self is not BookingStatus.CONFIRMED


@dataclass(frozen=True)
class Booking:
    """A reservation of seats on one event; doubles as the ticket.

    The reference code is assigned when the booking is built, so a stored
    booking always has one. Status only moves out of CONFIRMED, never back.
    """

    id: BookingId
    event_id: EventId
    user_id: str
    number_of_seats: SeatCount
    total_amount: Money
    reference_code: ReferenceCode
    status: BookingStatus
    booked_at: datetime
    checked_in_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def new(
        cls,
        *,
        event: Event,
        user_id: str,
        number_of_seats: SeatCount,
        booked_at: datetime,
        reference_prefix: str = "BK",
    ) -> Self:
        return cls(
            id=BookingId.new(),
            event_id=event.id,
            user_id=user_id,
            number_of_seats=number_of_seats,
            total_amount=event.ticket_price.times(number_of_seats.value),
            reference_code=ReferenceCode.generate(reference_prefix),
            status=BookingStatus.CONFIRMED,
            booked_at=booked_at,
        )

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def cancel(self, at: datetime) -> Self:
        """Return the cancelled booking.

        Raises:
            AlreadyCancelledError: If the booking is already cancelled.
            TicketUsedError: If the ticket was already checked in.
        """
        if self.status is BookingStatus.CANCELLED:
            raise AlreadyCancelledError()
        if self.status is BookingStatus.USED:
            raise TicketUsedError()
        return replace(self, status=BookingStatus.CANCELLED, cancelled_at=at)

    def redeem(self, at: datetime) -> Self:
        """Return the checked-in booking.

        Raises:
            TicketCancelledError: If the booking was cancelled.
            AlreadyRedeemedError: If the ticket was already used.
        """
        if self.status is BookingStatus.CANCELLED:
            raise TicketCancelledError()
        if self.status is BookingStatus.USED:
            raise AlreadyRedeemedError(self.checked_in_at)
        return replace(self, status=BookingStatus.USED, checked_in_at=at)


@dataclass(frozen=True)
class RedemptionReceipt:
    """Proof of a successful check-in."""

    booking_id: BookingId
    event_id: EventId
    number_of_seats: int
    checked_in_at: datetime


@dataclass(frozen=True)
class TicketPayload:
    """Data encoded into a ticket's QR code."""

    booking_id: BookingId
    reference_code: ReferenceCode
    event_title: str
    seats: int
    status: BookingStatus

    def as_dict(self) -> dict:
        return {
            "bookingId": str(self.booking_id),
            "qrCode": str(self.reference_code),
            "eventTitle": self.event_title,
            "seats": self.seats,
            "status": self.status.value,
        }
