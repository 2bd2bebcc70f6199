from ticketing.domain.models import (
    Booking,
    BookingStatus,
    Event,
    RedemptionReceipt,
    TicketPayload,
)
from ticketing.domain.value_objects import (
    BookingId,
    Capacity,
    EventId,
    Money,
    ReferenceCode,
    SeatCount,
)

__all__ = [
    "Event",
    "Booking",
    "BookingStatus",
    "RedemptionReceipt",
    "TicketPayload",
    "EventId",
    "BookingId",
    "Money",
    "Capacity",
    "SeatCount",
    "ReferenceCode",
]
