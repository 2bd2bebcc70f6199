"""Integration tests for the booking endpoints.

Run with: pytest tests/test_bookings_api.py -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.db import OperationalError
from django.utils import timezone
from rest_framework.test import APIClient

from ticketing import models
from ticketing.stores.django_store import DjangoEventStore


@pytest.fixture
def event_row() -> models.Event:
    return models.Event.objects.create(
        title="Spring Concert",
        description="An evening of music",
        venue="Main Hall",
        starts_at=timezone.now() + timedelta(days=30),
        total_seats=10,
        available_seats=10,
        ticket_price=Decimal("50.00"),
    )


def book(client: APIClient, event_id, seats: int):
    return client.post(
        "/api/bookings",
        {"eventId": str(event_id), "numberOfSeats": seats},
        format="json",
    )


@pytest.mark.django_db
class TestCreateBooking:
    """Tests for POST /api/bookings"""

    def test_create_booking(self, auth_client, user, event_row):
        response = book(auth_client, event_row.pk, 3)

        assert response.status_code == 201
        body = response.json()
        assert body["totalAmount"] == "150.00"
        assert body["status"] == "confirmed"
        assert body["userId"] == str(user.pk)
        assert body["qrCode"].startswith("BK")
        event_row.refresh_from_db()
        assert event_row.available_seats == 7

    def test_insufficient_inventory(self, auth_client, event_row):
        response = book(auth_client, event_row.pk, 11)

        assert response.status_code == 400
        assert response.json()["code"] == "INSUFFICIENT_INVENTORY"
        assert response.json()["available"] == 10
        assert models.Booking.objects.count() == 0

    def test_requires_authentication(self, api_client, event_row):
        response = book(api_client, event_row.pk, 1)
        assert response.status_code in (401, 403)
        assert models.Booking.objects.count() == 0

    def test_invalid_event_id(self, auth_client):
        response = book(auth_client, "not-a-uuid", 1)
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_EVENT_ID"

    def test_unknown_event(self, auth_client):
        response = book(auth_client, uuid.uuid4(), 1)
        assert response.status_code == 404
        assert response.json()["code"] == "EVENT_NOT_FOUND"

    def test_zero_seats_rejected(self, auth_client, event_row):
        response = book(auth_client, event_row.pk, 0)
        assert response.status_code == 400
        event_row.refresh_from_db()
        assert event_row.available_seats == 10

    def test_store_outage_returns_503(self, auth_client, event_row, monkeypatch):
        def locked_out(self, event_id, seats):
            raise OperationalError("database is locked")

        monkeypatch.setattr(DjangoEventStore, "debit_seats", locked_out)

        response = book(auth_client, event_row.pk, 2)

        assert response.status_code == 503
        assert response.json() == {
            "code": "STORE_UNAVAILABLE",
            "error": "Service temporarily unavailable, please retry",
        }
        assert models.Booking.objects.count() == 0
        event_row.refresh_from_db()
        assert event_row.available_seats == 10


@pytest.mark.django_db
class TestReadBookings:
    """Tests for GET /api/bookings/my and GET /api/bookings/{id}"""

    def test_my_bookings_only_lists_own(self, auth_client, other_user, event_row):
        mine = book(auth_client, event_row.pk, 1).json()
        other = APIClient()
        other.force_authenticate(user=other_user)
        book(other, event_row.pk, 2)

        response = auth_client.get("/api/bookings/my")

        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [mine["id"]]

    def test_booking_detail_for_owner(self, auth_client, event_row):
        created = book(auth_client, event_row.pk, 2).json()

        response = auth_client.get(f"/api/bookings/{created['id']}")

        assert response.status_code == 200
        assert response.json()["numberOfSeats"] == 2

    def test_booking_detail_for_someone_else(self, auth_client, other_user, event_row):
        created = book(auth_client, event_row.pk, 2).json()
        other = APIClient()
        other.force_authenticate(user=other_user)

        response = other.get(f"/api/bookings/{created['id']}")

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_unknown_booking(self, auth_client):
        response = auth_client.get(f"/api/bookings/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == "BOOKING_NOT_FOUND"


@pytest.mark.django_db
class TestCancelBooking:
    """Tests for PATCH /api/bookings/{id}/cancel"""

    def test_cancel_restores_seats(self, auth_client, event_row):
        created = book(auth_client, event_row.pk, 4).json()

        response = auth_client.patch(f"/api/bookings/{created['id']}/cancel")

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert response.json()["cancelledAt"] is not None
        event_row.refresh_from_db()
        assert event_row.available_seats == 10

    def test_cancel_twice(self, auth_client, event_row):
        created = book(auth_client, event_row.pk, 4).json()
        auth_client.patch(f"/api/bookings/{created['id']}/cancel")

        response = auth_client.patch(f"/api/bookings/{created['id']}/cancel")

        assert response.status_code == 400
        assert response.json()["code"] == "ALREADY_CANCELLED"
        event_row.refresh_from_db()
        assert event_row.available_seats == 10

    def test_cancel_someone_elses_booking(self, auth_client, other_user, event_row):
        created = book(auth_client, event_row.pk, 4).json()
        other = APIClient()
        other.force_authenticate(user=other_user)

        response = other.patch(f"/api/bookings/{created['id']}/cancel")

        assert response.status_code == 403
        event_row.refresh_from_db()
        assert event_row.available_seats == 6
