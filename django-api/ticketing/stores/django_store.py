"""Django ORM implementation of the stores.

Seat counts and booking statuses are changed with conditional UPDATE
statements, so a write only lands when its precondition still holds in
the database. select_for_update adds row locks on backends that have them.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from functools import partial

from django.db import OperationalError, transaction
from django.db.models import F
from django.utils import timezone

from ticketing import models
from ticketing.cache import invalidate_event
from ticketing.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Capacity,
    Event,
    EventId,
    Money,
    ReferenceCode,
    SeatCount,
)
from ticketing.domain.errors import TransientStoreError
from ticketing.stores.interfaces import BookingStore, EventStore, UnitOfWork

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """Maps a unit of work onto transaction.atomic."""

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic():
                yield
        except OperationalError as exc:
            logger.warning("Store operation failed, transaction rolled back: %s", exc)
            raise TransientStoreError() from exc


def _event_to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        description=row.description,
        venue=row.venue,
        starts_at=row.starts_at,
        total_seats=Capacity(row.total_seats),
        available_seats=Capacity(row.available_seats),
        ticket_price=Money(row.ticket_price),
        created_at=row.created_at,
    )


def _booking_to_domain(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        event_id=EventId(row.event_id),
        user_id=row.user_id,
        number_of_seats=SeatCount(row.number_of_seats),
        total_amount=Money(row.total_amount),
        reference_code=ReferenceCode(row.reference_code),
        status=BookingStatus(row.status),
        booked_at=row.booked_at,
        checked_in_at=row.checked_in_at,
        cancelled_at=row.cancelled_at,
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def list_events(self) -> list[Event]:
        return [_event_to_domain(row) for row in models.Event.objects.order_by("starts_at")]

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(pk=event_id.value).first()
        return _event_to_domain(row) if row else None

    def add_event(self, event: Event) -> None:
        models.Event.objects.create(
            id=event.id.value,
            title=event.title,
            description=event.description,
            venue=event.venue,
            starts_at=event.starts_at,
            total_seats=event.total_seats.value,
            available_seats=event.available_seats.value,
            ticket_price=event.ticket_price.amount,
        )

    def delete_event(self, event_id: EventId) -> bool:
        deleted, _ = models.Event.objects.filter(pk=event_id.value).delete()
        return deleted > 0

    def lock_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
        return _event_to_domain(row) if row else None

    def debit_seats(self, event_id: EventId, seats: int) -> bool:
        updated = models.Event.objects.filter(
            pk=event_id.value, available_seats__gte=seats
        ).update(
            available_seats=F("available_seats") - seats,
            updated_at=timezone.now(),
        )
        if updated:
            transaction.on_commit(partial(invalidate_event, event_id.value))
        return updated == 1

    def credit_seats(self, event_id: EventId, seats: int) -> bool:
        updated = models.Event.objects.filter(
            pk=event_id.value, available_seats__lte=F("total_seats") - seats
        ).update(
            available_seats=F("available_seats") + seats,
            updated_at=timezone.now(),
        )
        if updated:
            transaction.on_commit(partial(invalidate_event, event_id.value))
        return updated == 1


class DjangoBookingStore(BookingStore):
    """Relational booking store using Django ORM."""

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = models.Booking.objects.filter(pk=booking_id.value).first()
        return _booking_to_domain(row) if row else None

    def lock_booking(self, booking_id: BookingId) -> Booking | None:
        row = models.Booking.objects.select_for_update().filter(pk=booking_id.value).first()
        return _booking_to_domain(row) if row else None

    def find_by_reference(self, reference_code: str) -> Booking | None:
        row = models.Booking.objects.filter(reference_code=reference_code).first()
        return _booking_to_domain(row) if row else None

    def add_booking(self, booking: Booking) -> None:
        models.Booking.objects.create(
            id=booking.id.value,
            event_id=booking.event_id.value,
            user_id=booking.user_id,
            number_of_seats=booking.number_of_seats.value,
            total_amount=booking.total_amount.amount,
            reference_code=booking.reference_code.value,
            status=booking.status.value,
            booked_at=booking.booked_at,
        )

    def transition(self, booking: Booking, from_status: BookingStatus) -> bool:
        updated = models.Booking.objects.filter(
            pk=booking.id.value, status=from_status.value
        ).update(
            status=booking.status.value,
            checked_in_at=booking.checked_in_at,
            cancelled_at=booking.cancelled_at,
        )
        return updated == 1

    def list_for_user(self, user_id: str) -> list[Booking]:
        rows = models.Booking.objects.filter(user_id=user_id).order_by("-booked_at")
        return [_booking_to_domain(row) for row in rows]

    def list_for_event(self, event_id: EventId) -> list[Booking]:
        rows = models.Booking.objects.filter(event_id=event_id.value)
        return [_booking_to_domain(row) for row in rows]
