"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from factories import FakeClock, make_event
from ticketing.domain import Event
from ticketing.services.booking_service import BookingService
from ticketing.services.ticket_service import TicketService
from ticketing.stores.memory_store import (
    InMemoryBookingStore,
    InMemoryDatabase,
    InMemoryEventStore,
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def event_store(memory_db) -> InMemoryEventStore:
    return InMemoryEventStore(memory_db)


@pytest.fixture
def booking_store(memory_db) -> InMemoryBookingStore:
    return InMemoryBookingStore(memory_db)


@pytest.fixture
def booking_service(event_store, booking_store, memory_db, clock) -> BookingService:
    return BookingService(event_store, booking_store, memory_db, clock=clock)


@pytest.fixture
def ticket_service(event_store, booking_store, memory_db, clock) -> TicketService:
    return TicketService(event_store, booking_store, memory_db, clock=clock)


@pytest.fixture
def event(event_store) -> Event:
    event = make_event()
    event_store.add_event(event)
    return event


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="alice", password="secret")


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username="bob", password="secret")


@pytest.fixture
def auth_client(api_client, user) -> APIClient:
    api_client.force_authenticate(user=user)
    return api_client
