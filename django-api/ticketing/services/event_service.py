"""Event service - catalog operations the ledger depends on.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Seat counts are only set here when an event is created; afterwards the
booking service owns them.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

from ticketing.domain import Event, EventId, Money
from ticketing.domain.errors import EventNotFoundError, InvalidEventIdError
from ticketing.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(str(event_id))
    except ValueError as exc:
        raise InvalidEventIdError() from exc


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def create_event(
        self,
        *,
        title: str,
        description: str,
        venue: str,
        starts_at: datetime,
        total_seats: int,
        ticket_price: Decimal,
    ) -> Event:
        """Create an event with every seat available."""
        event = Event.new(
            title=title,
            description=description,
            venue=venue,
            starts_at=starts_at,
            total_seats=total_seats,
            ticket_price=Money(ticket_price),
            created_at=self._clock(),
        )
        self._store.add_event(event)
        logger.info("Event %s created with %d seats", event.id, total_seats)
        return event

    def delete_event(self, event_id: str) -> None:
        """Delete an event. Its bookings are kept.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        if not self._store.delete_event(parse_event_id(event_id)):
            raise EventNotFoundError(event_id)
        logger.info("Event %s deleted", event_id)
