"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
Seat and status writes are compare-and-update operations: they report
whether the condition held instead of trusting an earlier read.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from ticketing.domain import Booking, BookingId, BookingStatus, Event, EventId


class UnitOfWork(ABC):
    """Transactional scope shared by the stores of one backend."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open a scope whose writes commit or roll back together.

        Row locks taken inside the scope are held until it exits.

        Raises:
            TransientStoreError: If the backend fails mid-scope.
        """
        ...


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by starts_at ascending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def add_event(self, event: Event) -> None:
        """Persist a new event."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> bool:
        """Delete an event. Return False if it did not exist."""
        ...

    @abstractmethod
    def lock_event(self, event_id: EventId) -> Event | None:
        """Read an event and hold its row lock for the current scope."""
        ...

    @abstractmethod
    def debit_seats(self, event_id: EventId, seats: int) -> bool:
        """Subtract seats if at least that many are available."""
        ...

    @abstractmethod
    def credit_seats(self, event_id: EventId, seats: int) -> bool:
        """Add seats back if the result stays within total seats.

        Return False if the event no longer exists.
        """
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        """Return a booking by ID, or None if not found."""
        ...

    @abstractmethod
    def lock_booking(self, booking_id: BookingId) -> Booking | None:
        """Read a booking and hold its row lock for the current scope."""
        ...

    @abstractmethod
    def find_by_reference(self, reference_code: str) -> Booking | None:
        """Return the booking with this exact reference code."""
        ...

    @abstractmethod
    def add_booking(self, booking: Booking) -> None:
        """Persist a new booking."""
        ...

    @abstractmethod
    def transition(self, booking: Booking, from_status: BookingStatus) -> bool:
        """Write the booking's new status only if the stored one is from_status."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Booking]:
        """Return a user's bookings, most recent first."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[Booking]:
        """Return all bookings on an event."""
        ...
