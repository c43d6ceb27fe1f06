"""Domain models for orders."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class OrderStatus(Enum):
    """Order lifecycle states."""

    PENDING = "pending"
    FINISHED = "finished"
    DECLINED = "declined"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING


@dataclass(frozen=True)
class OrderLine:
    """Single ordered item."""

    item_code: int
    quantity: int


@dataclass(frozen=True)
class Order:
    """Represents a persisted order."""

    code: str
    owner: str
    status: OrderStatus
    lines: list[OrderLine]
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
