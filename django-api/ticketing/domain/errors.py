"""Domain error codes for the ticketing module."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_BOOKING_ID = "INVALID_BOOKING_ID"
    INVALID_SEAT_COUNT = "INVALID_SEAT_COUNT"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    FORBIDDEN = "FORBIDDEN"
    ALREADY_CANCELLED = "ALREADY_CANCELLED"
    TICKET_USED = "TICKET_USED"
    TICKET_CANCELLED = "TICKET_CANCELLED"
    ALREADY_REDEEMED = "ALREADY_REDEEMED"
    INVALID_REFERENCE = "INVALID_REFERENCE"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class BookingNotFoundError(DomainError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidBookingIdError(DomainError):
    """Raised when a booking ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BOOKING_ID,
            message="Invalid booking ID format",
        )


class InvalidSeatCountError(DomainError):
    """Raised when fewer than one seat is requested."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SEAT_COUNT,
            message="Number of seats must be at least 1",
        )


class InsufficientInventoryError(DomainError):
    """Raised when more seats are requested than the event has left."""

    def __init__(self, available: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_INVENTORY,
            message=f"Only {available} seats available",
        )
        self.available = available


class BookingForbiddenError(DomainError):
    """Raised when the requester does not own the booking."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.FORBIDDEN,
            message="Access denied",
        )


class AlreadyCancelledError(DomainError):
    """Raised when cancelling a booking that is already cancelled."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_CANCELLED,
            message="Booking already cancelled",
        )


class TicketUsedError(DomainError):
    """Raised when cancelling a ticket that has been checked in."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TICKET_USED,
            message="Ticket has already been used and cannot be cancelled",
        )


class TicketCancelledError(DomainError):
    """Raised when redeeming a cancelled ticket."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TICKET_CANCELLED,
            message="Booking has been cancelled",
        )


class AlreadyRedeemedError(DomainError):
    """Raised when redeeming a ticket a second time."""

    def __init__(self, checked_in_at: datetime | None) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REDEEMED,
            message="Ticket already used",
        )
        self.checked_in_at = checked_in_at


class InvalidReferenceError(DomainError):
    """Raised for unknown reference codes; never says why."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_REFERENCE,
            message="Invalid QR code",
        )


class TransientStoreError(DomainError):
    """Raised when the store fails mid-unit; nothing was applied."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Service temporarily unavailable, please retry",
        )
