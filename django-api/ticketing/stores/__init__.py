from ticketing.stores.interfaces import BookingStore, EventStore, UnitOfWork

__all__ = ["BookingStore", "EventStore", "UnitOfWork"]
