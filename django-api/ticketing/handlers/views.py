"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses (see handlers/errors.py)
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ticketing.cache import EVENTS_LIST_KEY, cache_timeout, event_detail_key
from ticketing.handlers import deps
from ticketing.handlers.serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    EventCreateSerializer,
    EventSerializer,
    RedemptionReceiptSerializer,
    VerifyTicketSerializer,
)
from ticketing.qr import render_data_url
from ticketing.services.event_service import parse_event_id


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAdminUser()]
        return [AllowAny()]

    def get(self, request: Request) -> Response:
        data = cache.get(EVENTS_LIST_KEY)
        if data is None:
            events = deps.get_event_service().list_events()
            data = list(EventSerializer(events, many=True).data)
            cache.set(EVENTS_LIST_KEY, data, cache_timeout())
        return Response(data)

    def post(self, request: Request) -> Response:
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = serializer.validated_data
        event = deps.get_event_service().create_event(
            title=payload["title"],
            description=payload["description"],
            venue=payload["venue"],
            starts_at=payload["date"],
            total_seats=payload["totalSeats"],
            ticket_price=payload["ticketPrice"],
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET/DELETE /api/events/{event_id}"""

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAdminUser()]
        return [AllowAny()]

    def get(self, request: Request, event_id: str) -> Response:
        key = event_detail_key(parse_event_id(event_id))
        data = cache.get(key)
        if data is None:
            event = deps.get_event_service().get_event(event_id)
            data = dict(EventSerializer(event).data)
            cache.set(key, data, cache_timeout())
        return Response(data)

    def delete(self, request: Request, event_id: str) -> Response:
        deps.get_event_service().delete_event(event_id)
        return Response({"message": "Event deleted successfully"})


class BookingCreateView(APIView):
    """Handler for POST /api/bookings"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = deps.get_booking_service().create_booking(
            serializer.validated_data["eventId"],
            deps.requester_id(request),
            serializer.validated_data["numberOfSeats"],
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class MyBookingsView(APIView):
    """Handler for GET /api/bookings/my"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        bookings = deps.get_booking_service().list_bookings(deps.requester_id(request))
        return Response(BookingSerializer(bookings, many=True).data)


class BookingDetailView(APIView):
    """Handler for GET /api/bookings/{booking_id}"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, booking_id: str) -> Response:
        booking = deps.get_booking_service().get_booking(
            booking_id, deps.requester_id(request)
        )
        return Response(BookingSerializer(booking).data)


class BookingCancelView(APIView):
    """Handler for PATCH /api/bookings/{booking_id}/cancel"""

    permission_classes = [IsAuthenticated]

    def patch(self, request: Request, booking_id: str) -> Response:
        booking = deps.get_booking_service().cancel_booking(
            booking_id, deps.requester_id(request)
        )
        return Response(BookingSerializer(booking).data)


class TicketQRCodeView(APIView):
    """Handler for GET /api/tickets/{booking_id}/qrcode"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, booking_id: str) -> Response:
        payload = deps.get_ticket_service().ticket_payload(
            booking_id, deps.requester_id(request)
        )
        return Response(
            {
                "qrCode": render_data_url(payload),
                "bookingReference": str(payload.reference_code),
                "booking": payload.as_dict(),
            }
        )


class TicketVerifyView(APIView):
    """Handler for POST /api/tickets/verify"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        serializer = VerifyTicketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        receipt = deps.get_ticket_service().redeem(serializer.validated_data["qrCode"])
        return Response(
            {
                "message": "Check-in successful",
                "booking": RedemptionReceiptSerializer(receipt).data,
            }
        )
