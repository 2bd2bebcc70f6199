"""Serializers for transforming domain models to API responses.

Input serializers only check request shape; business rules are enforced
by the services.
"""

from rest_framework import serializers


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField(source="id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    venue = serializers.CharField()
    date = serializers.DateTimeField(source="starts_at")
    totalSeats = serializers.IntegerField(source="total_seats.value")
    availableSeats = serializers.IntegerField(source="available_seats.value")
    ticketPrice = serializers.DecimalField(
        source="ticket_price.amount", max_digits=10, decimal_places=2
    )
    createdAt = serializers.DateTimeField(source="created_at")


class EventCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    venue = serializers.CharField(max_length=255)
    date = serializers.DateTimeField()
    totalSeats = serializers.IntegerField(min_value=1)
    ticketPrice = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField(source="id.value")
    eventId = serializers.CharField(source="event_id.value")
    userId = serializers.CharField(source="user_id")
    numberOfSeats = serializers.IntegerField(source="number_of_seats.value")
    totalAmount = serializers.DecimalField(
        source="total_amount.amount", max_digits=12, decimal_places=2
    )
    qrCode = serializers.CharField(source="reference_code.value")
    status = serializers.CharField(source="status.value")
    bookingDate = serializers.DateTimeField(source="booked_at")
    checkedInAt = serializers.DateTimeField(source="checked_in_at", allow_null=True)
    cancelledAt = serializers.DateTimeField(source="cancelled_at", allow_null=True)


class BookingCreateSerializer(serializers.Serializer):
    eventId = serializers.CharField()
    numberOfSeats = serializers.IntegerField(min_value=1)


class VerifyTicketSerializer(serializers.Serializer):
    qrCode = serializers.CharField()


class RedemptionReceiptSerializer(serializers.Serializer):
    """Serializer for RedemptionReceipt domain model."""

    id = serializers.CharField(source="booking_id.value")
    eventId = serializers.CharField(source="event_id.value")
    seats = serializers.IntegerField(source="number_of_seats")
    checkedInAt = serializers.DateTimeField(source="checked_in_at")
