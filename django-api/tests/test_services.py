"""Unit tests for EventService.

These test error handling and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

import uuid
from decimal import Decimal

import pytest

from factories import NOW
from ticketing.domain.errors import EventNotFoundError, InvalidEventIdError
from ticketing.services.event_service import EventService


@pytest.fixture
def service(event_store, clock) -> EventService:
    return EventService(event_store, clock=clock)


class TestEventService:
    """Tests for EventService."""

    def test_get_event_invalid_id_raises_error(self, service):
        with pytest.raises(InvalidEventIdError):
            service.get_event("not-a-uuid")

    def test_get_event_not_found_raises_error(self, service):
        with pytest.raises(EventNotFoundError):
            service.get_event(str(uuid.uuid4()))

    def test_create_event_makes_every_seat_available(self, service):
        event = service.create_event(
            title="Tech Talk",
            description="Talks",
            venue="Room 1",
            starts_at=NOW,
            total_seats=25,
            ticket_price=Decimal("12.00"),
        )
        stored = service.get_event(str(event.id))
        assert stored.total_seats.value == 25
        assert stored.available_seats.value == 25
        assert stored.created_at == NOW

    def test_list_events_ordered_by_start(self, service):
        later = service.create_event(
            title="Later", description="", venue="A", starts_at=NOW.replace(day=20),
            total_seats=1, ticket_price=Decimal("0"),
        )
        sooner = service.create_event(
            title="Sooner", description="", venue="A", starts_at=NOW.replace(day=15),
            total_seats=1, ticket_price=Decimal("0"),
        )
        assert [e.id for e in service.list_events()] == [sooner.id, later.id]

    def test_delete_event_not_found_raises_error(self, service):
        with pytest.raises(EventNotFoundError):
            service.delete_event(str(uuid.uuid4()))

    def test_delete_event_removes_it(self, service, event):
        service.delete_event(str(event.id))
        with pytest.raises(EventNotFoundError):
            service.get_event(str(event.id))
