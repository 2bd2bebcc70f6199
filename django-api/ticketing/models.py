"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField()
    venue = models.CharField(max_length=255)
    starts_at = models.DateTimeField()
    total_seats = models.PositiveIntegerField()
    available_seats = models.PositiveIntegerField()
    ticket_price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["starts_at"], name="ticketing_e_starts__6b1f0d_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(available_seats__lte=models.F("total_seats")),
                name="event_available_within_total",
            ),
            models.CheckConstraint(
                condition=models.Q(total_seats__gte=1),
                name="event_total_seats_positive",
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Booking(models.Model):
    """Persistence model for bookings. Rows are never deleted."""

    class Status(models.TextChoices):
        CONFIRMED = "confirmed"
        CANCELLED = "cancelled"
        USED = "used"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Plain ids: bookings outlive deleted events and belong to an external user.
    event_id = models.UUIDField(db_index=True)
    user_id = models.CharField(max_length=64, db_index=True)
    number_of_seats = models.PositiveIntegerField()
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    reference_code = models.CharField(max_length=64, unique=True, editable=False)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.CONFIRMED
    )
    booked_at = models.DateTimeField()
    checked_in_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-booked_at"]
        indexes = [
            models.Index(
                fields=["user_id", "-booked_at"], name="ticketing_b_user_id_3c9a2e_idx"
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(number_of_seats__gte=1),
                name="booking_seats_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.reference_code} ({self.status})"
