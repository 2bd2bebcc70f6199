"""In-process implementation of the stores.

Each event and booking has its own lock. Inside an atomic scope a lock,
once taken, is held until the scope ends and every write is recorded in
an undo log that is replayed if the scope raises. There is no lock that
covers the whole database, so work on different events proceeds in
parallel.
"""

import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from ticketing.domain import Booking, BookingId, BookingStatus, Capacity, Event, EventId
from ticketing.stores.interfaces import BookingStore, EventStore, UnitOfWork

_MISSING = object()


class _Scope:
    def __init__(self) -> None:
        self.held: dict[object, threading.RLock] = {}
        self.undo: list[tuple[dict, object, object]] = []

    def rollback(self) -> None:
        for table, key, previous in reversed(self.undo):
            if previous is _MISSING:
                table.pop(key, None)
            else:
                table[key] = previous
        self.undo.clear()

    def release(self) -> None:
        for lock in self.held.values():
            lock.release()
        self.held.clear()


class InMemoryDatabase(UnitOfWork):
    """Shared state for InMemoryEventStore and InMemoryBookingStore."""

    def __init__(self) -> None:
        self.events: dict[EventId, Event] = {}
        self.bookings: dict[BookingId, Booking] = {}
        self.references: dict[str, BookingId] = {}
        # A lock lives only while some caller references it.
        self._locks: weakref.WeakValueDictionary = weakref.WeakValueDictionary()
        self._registry = threading.Lock()
        self._local = threading.local()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        if self._scope() is not None:
            # Nested scopes join the outer one.
            yield
            return
        scope = _Scope()
        self._local.scope = scope
        try:
            yield
        except BaseException:
            scope.rollback()
            raise
        finally:
            self._local.scope = None
            scope.release()

    def _scope(self) -> _Scope | None:
        return getattr(self._local, "scope", None)

    def _lock_for(self, key: object) -> threading.RLock:
        with self._registry:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def locked(self, key: object) -> Iterator[None]:
        """Hold a row lock; inside a scope it stays held until the scope ends."""
        lock = self._lock_for(key)
        scope = self._scope()
        if scope is None:
            with lock:
                yield
            return
        if key not in scope.held:
            lock.acquire()
            scope.held[key] = lock
        yield

    def read(self, table: dict, key: object):
        """Read a committed value; waits for any scope holding the row."""
        with self._lock_for(key):
            return table.get(key)

    def write(self, table: dict, key: object, value: object) -> None:
        previous = table.get(key, _MISSING)
        if value is _MISSING:
            table.pop(key, None)
        else:
            table[key] = value
        scope = self._scope()
        if scope is not None:
            scope.undo.append((table, key, previous))

    def delete(self, table: dict, key: object) -> None:
        self.write(table, key, _MISSING)


class InMemoryEventStore(EventStore):
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def list_events(self) -> list[Event]:
        events = [self._db.read(self._db.events, key) for key in list(self._db.events)]
        return sorted((e for e in events if e is not None), key=lambda e: e.starts_at)

    def get_event(self, event_id: EventId) -> Event | None:
        return self._db.read(self._db.events, event_id)

    def add_event(self, event: Event) -> None:
        with self._db.locked(event.id):
            if event.id in self._db.events:
                raise ValueError(f"Event {event.id} already exists")
            self._db.write(self._db.events, event.id, event)

    def delete_event(self, event_id: EventId) -> bool:
        with self._db.locked(event_id):
            if event_id not in self._db.events:
                return False
            self._db.delete(self._db.events, event_id)
            return True

    def lock_event(self, event_id: EventId) -> Event | None:
        with self._db.locked(event_id):
            return self._db.events.get(event_id)

    def debit_seats(self, event_id: EventId, seats: int) -> bool:
        with self._db.locked(event_id):
            event = self._db.events.get(event_id)
            if event is None or event.available_seats.value < seats:
                return False
            available = Capacity(event.available_seats.value - seats)
            self._db.write(self._db.events, event_id, replace(event, available_seats=available))
            return True

    def credit_seats(self, event_id: EventId, seats: int) -> bool:
        with self._db.locked(event_id):
            event = self._db.events.get(event_id)
            if event is None:
                return False
            if event.available_seats.value + seats > event.total_seats.value:
                return False
            available = Capacity(event.available_seats.value + seats)
            self._db.write(self._db.events, event_id, replace(event, available_seats=available))
            return True


class InMemoryBookingStore(BookingStore):
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        return self._db.read(self._db.bookings, booking_id)

    def lock_booking(self, booking_id: BookingId) -> Booking | None:
        with self._db.locked(booking_id):
            return self._db.bookings.get(booking_id)

    def find_by_reference(self, reference_code: str) -> Booking | None:
        booking_id = self._db.read(self._db.references, reference_code)
        if booking_id is None:
            return None
        return self.get_booking(booking_id)

    def add_booking(self, booking: Booking) -> None:
        code = booking.reference_code.value
        with self._db.locked(booking.id), self._db.locked(code):
            if code in self._db.references:
                raise ValueError("Duplicate reference code")
            self._db.write(self._db.bookings, booking.id, booking)
            self._db.write(self._db.references, code, booking.id)

    def transition(self, booking: Booking, from_status: BookingStatus) -> bool:
        with self._db.locked(booking.id):
            current = self._db.bookings.get(booking.id)
            if current is None or current.status is not from_status:
                return False
            self._db.write(self._db.bookings, booking.id, booking)
            return True

    def list_for_user(self, user_id: str) -> list[Booking]:
        bookings = [self.get_booking(key) for key in list(self._db.bookings)]
        mine = [b for b in bookings if b is not None and b.user_id == user_id]
        return sorted(mine, key=lambda b: b.booked_at, reverse=True)

    def list_for_event(self, event_id: EventId) -> list[Booking]:
        bookings = [self.get_booking(key) for key in list(self._db.bookings)]
        return [b for b in bookings if b is not None and b.event_id == event_id]
