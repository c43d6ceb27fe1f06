"""Order workflow: creation, listing and admin transitions."""

import logging
import secrets
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from vsg_marketplace.domain.callers import Caller, CallerRole
from vsg_marketplace.domain.orders import Order, OrderLine, OrderStatus
from vsg_marketplace.errors import (
    InsufficientQuantity,
    InvalidState,
    MarketplaceError,
    NotFound,
)
from vsg_marketplace.services.items import ItemRepository, ensure_admin

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def create_order(self, order: Order) -> Order:
        """Persist a new order and return it."""

    def get_order(self, code: str) -> Order | None:
        """Return an order by code, if present."""

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        """Return all orders with the given status."""

    def list_for_owner(self, owner: str) -> list[Order]:
        """Return all orders placed by an owner."""

    def update_status(self, code: str, status: OrderStatus) -> None:
        """Set the status of an order."""


@dataclass(frozen=True)
class StockChange:
    """Quantity deltas applied to one item."""

    item_code: int
    quantity_delta: int = 0
    quantity_for_sale_delta: int = 0

    def inverse(self) -> "StockChange":
        return StockChange(
            self.item_code, -self.quantity_delta, -self.quantity_for_sale_delta
        )


def generate_order_code() -> str:
    """Return a short random order code."""
    return secrets.token_hex(4)


@dataclass
class OrderService:
    """State machine for marketplace orders.

    Stock changes are applied before the order write they belong to. When a
    later stock change or the order write fails, the changes already applied
    are reverted so that an order and its stock effects land together.
    """

    repository: OrderRepository
    item_repository: ItemRepository
    code_factory: Callable[[], str] = field(default=generate_order_code)

    def create(self, caller: Caller, lines: list[OrderLine]) -> Order:
        """Create a pending order after checking every line against stock."""
        if not lines:
            raise ValueError("An order needs at least one line")
        requested: Counter[int] = Counter()
        for line in lines:
            if line.quantity <= 0:
                raise ValueError("Ordered quantity must be positive")
            requested[line.item_code] += line.quantity

        for item_code, quantity in requested.items():
            item = self.item_repository.get_item(item_code)
            if item is None:
                raise NotFound(f"Item {item_code} not found")
            if item.quantity_for_sale < quantity:
                raise InsufficientQuantity(
                    f"Only {item.quantity_for_sale} of item {item_code} available"
                )

        order = Order(
            code=self.code_factory(),
            owner=caller.email,
            status=OrderStatus.PENDING,
            lines=list(lines),
        )
        changes = [
            StockChange(item_code, quantity_for_sale_delta=-quantity)
            for item_code, quantity in requested.items()
        ]
        created = self._with_stock(changes, lambda: self.repository.create_order(order))
        logger.info("Order created", extra={"order_code": created.code})
        return created

    def finish(self, code: str, role: CallerRole) -> None:
        """Mark a pending order as finished and release its stock."""
        ensure_admin(role)
        order = self._pending_order(code)
        changes = [
            StockChange(line.item_code, quantity_delta=-line.quantity)
            for line in order.lines
        ]
        self._with_stock(
            changes, lambda: self.repository.update_status(code, OrderStatus.FINISHED)
        )

    def decline(self, code: str, role: CallerRole) -> None:
        """Mark a pending order as declined and return its quantities for sale."""
        ensure_admin(role)
        order = self._pending_order(code)
        changes = [
            StockChange(line.item_code, quantity_for_sale_delta=line.quantity)
            for line in order.lines
        ]
        self._with_stock(
            changes, lambda: self.repository.update_status(code, OrderStatus.DECLINED)
        )

    def list_pending(self, role: CallerRole) -> list[Order]:
        """Return pending orders of all users."""
        ensure_admin(role)
        return self.repository.list_by_status(OrderStatus.PENDING)

    def list_for_user(self, caller: Caller) -> list[Order]:
        """Return the caller's own orders."""
        return self.repository.list_for_owner(caller.email)

    def _pending_order(self, code: str) -> Order:
        order = self.repository.get_order(code)
        if order is None:
            raise NotFound(f"Order {code} not found")
        if order.status.is_terminal:
            raise InvalidState(f"Order {code} is already {order.status.value}")
        return order

    def _with_stock(self, changes: list[StockChange], write: Callable[[], T]) -> T:
        applied: list[StockChange] = []
        try:
            for change in changes:
                self._apply(change)
                applied.append(change)
            return write()
        except Exception as exc:
            self._revert(applied, exc)
            raise

    def _apply(self, change: StockChange) -> None:
        self.item_repository.adjust_quantities(
            change.item_code,
            quantity_delta=change.quantity_delta,
            quantity_for_sale_delta=change.quantity_for_sale_delta,
        )

    def _revert(self, applied: list[StockChange], cause: Exception) -> None:
        for change in reversed(applied):
            try:
                self._apply(change.inverse())
            except Exception as revert_error:
                logger.exception(
                    "Reverting stock change failed",
                    extra={"item_code": change.item_code},
                )
                if isinstance(cause, MarketplaceError):
                    cause.compensation_error = revert_error
                cause.add_note(
                    f"Reverting stock of item {change.item_code} failed: {revert_error}"
                )
