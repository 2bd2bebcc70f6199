"""Unit tests for TicketService check-in.

Run with: pytest tests/test_ticket_service.py -v
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from ticketing.domain import BookingStatus
from ticketing.domain.errors import (
    AlreadyRedeemedError,
    BookingForbiddenError,
    InvalidReferenceError,
    TicketCancelledError,
)


@pytest.fixture
def booking(booking_service, event):
    return booking_service.create_booking(str(event.id), "alice", 2)


class TestRedeem:
    def test_redeem_marks_ticket_used(self, ticket_service, booking_store, booking, clock):
        receipt = ticket_service.redeem(booking.reference_code.value)

        assert receipt.booking_id == booking.id
        assert receipt.event_id == booking.event_id
        assert receipt.number_of_seats == 2
        assert receipt.checked_in_at == clock.now
        stored = booking_store.get_booking(booking.id)
        assert stored.status is BookingStatus.USED
        assert stored.checked_in_at == clock.now

    def test_second_redeem_reports_first_check_in(
        self, ticket_service, booking_store, booking, clock
    ):
        first = ticket_service.redeem(booking.reference_code.value)
        clock.advance(hours=1)

        with pytest.raises(AlreadyRedeemedError) as exc_info:
            ticket_service.redeem(booking.reference_code.value)

        assert exc_info.value.checked_in_at == first.checked_in_at
        assert booking_store.get_booking(booking.id).checked_in_at == first.checked_in_at

    def test_cancelled_ticket_cannot_be_redeemed(
        self, ticket_service, booking_service, booking_store, booking
    ):
        booking_service.cancel_booking(str(booking.id), "alice")

        with pytest.raises(TicketCancelledError):
            ticket_service.redeem(booking.reference_code.value)

        assert booking_store.get_booking(booking.id).status is BookingStatus.CANCELLED

    def test_redeem_does_not_touch_seats(self, ticket_service, event_store, event, booking):
        ticket_service.redeem(booking.reference_code.value)
        assert event_store.get_event(event.id).available_seats.value == 98

    @pytest.mark.parametrize("code", ["", "BK0000000000000UNKNOWN00"])
    def test_unknown_reference(self, ticket_service, booking, code):
        with pytest.raises(InvalidReferenceError):
            ticket_service.redeem(code)

    def test_reference_match_is_exact(self, ticket_service, booking):
        with pytest.raises(InvalidReferenceError):
            ticket_service.redeem(booking.reference_code.value.lower())

    def test_concurrent_redeems_succeed_once(self, ticket_service, booking_store, booking):
        attempts = 20
        start = threading.Barrier(attempts)

        def scan(_):
            start.wait()
            try:
                return ticket_service.redeem(booking.reference_code.value)
            except AlreadyRedeemedError as exc:
                return exc

        with ThreadPoolExecutor(max_workers=attempts) as pool:
            results = list(pool.map(scan, range(attempts)))

        receipts = [r for r in results if not isinstance(r, AlreadyRedeemedError)]
        rejected = [r for r in results if isinstance(r, AlreadyRedeemedError)]
        assert len(receipts) == 1
        assert len(rejected) == attempts - 1
        assert all(r.checked_in_at == receipts[0].checked_in_at for r in rejected)
        assert booking_store.get_booking(booking.id).status is BookingStatus.USED


class TestTicketPayload:
    def test_payload_for_owner(self, ticket_service, event, booking):
        payload = ticket_service.ticket_payload(str(booking.id), "alice")

        assert payload.as_dict() == {
            "bookingId": str(booking.id),
            "qrCode": booking.reference_code.value,
            "eventTitle": event.title,
            "seats": 2,
            "status": "confirmed",
        }

    def test_payload_for_someone_else(self, ticket_service, booking):
        with pytest.raises(BookingForbiddenError):
            ticket_service.ticket_payload(str(booking.id), "bob")

    def test_payload_after_event_deleted(self, ticket_service, event_store, event, booking):
        event_store.delete_event(event.id)
        assert ticket_service.ticket_payload(str(booking.id), "alice").event_title == ""
