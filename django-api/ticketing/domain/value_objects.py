"""Domain primitives that enforce validity at creation time."""

import secrets
import string
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Self
from uuid import UUID, uuid4

_BASE36 = string.digits + string.ascii_uppercase


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def times(self, count: int) -> "Money":
        return Money(self.amount * count)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class SeatCount:
    """Number of seats held by a single booking; at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Seat count must be an integer")
        if self.value < 1:
            raise ValueError("Seat count must be at least 1")


@dataclass(frozen=True)
class ReferenceCode:
    """Opaque credential printed on a ticket and scanned at check-in."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Reference code cannot be empty")

    @classmethod
    def generate(cls, prefix: str = "BK") -> Self:
        """Millisecond timestamp plus nine random base36 characters."""
        millis = time.time_ns() // 1_000_000
        suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
        return cls(value=f"{prefix}{millis}{suffix}")

    def masked(self) -> str:
        """Short form safe to put in logs."""
        return f"...{self.value[-4:]}"

    def __str__(self) -> str:
        return self.value
