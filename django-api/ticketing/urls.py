from django.urls import path

from ticketing.handlers import (
    BookingCancelView,
    BookingCreateView,
    BookingDetailView,
    EventDetailView,
    EventListView,
    MyBookingsView,
    TicketQRCodeView,
    TicketVerifyView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("bookings", BookingCreateView.as_view(), name="booking-create"),
    path("bookings/my", MyBookingsView.as_view(), name="booking-my"),
    path(
        "bookings/<str:booking_id>",
        BookingDetailView.as_view(),
        name="booking-detail",
    ),
    path(
        "bookings/<str:booking_id>/cancel",
        BookingCancelView.as_view(),
        name="booking-cancel",
    ),
    path("tickets/verify", TicketVerifyView.as_view(), name="ticket-verify"),
    path(
        "tickets/<str:booking_id>/qrcode",
        TicketQRCodeView.as_view(),
        name="ticket-qrcode",
    ),
]
