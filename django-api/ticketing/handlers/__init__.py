from ticketing.handlers.views import (
    BookingCancelView,
    BookingCreateView,
    BookingDetailView,
    EventDetailView,
    EventListView,
    MyBookingsView,
    TicketQRCodeView,
    TicketVerifyView,
)

__all__ = [
    "EventListView",
    "EventDetailView",
    "BookingCreateView",
    "MyBookingsView",
    "BookingDetailView",
    "BookingCancelView",
    "TicketQRCodeView",
    "TicketVerifyView",
]
