"""Supabase-backed order repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from vsg_marketplace.adapters.supabase_queries import execute_read, execute_write
from vsg_marketplace.domain.orders import Order, OrderLine, OrderStatus
from vsg_marketplace.services.orders import OrderRepository

_COLUMNS = "code, owner_email, status, lines_json, created_at"


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for order persistence."""

    client: Client

    def create_order(self, order: Order) -> Order:
        """Insert an order row and return it."""
        rows = execute_write(
            self.client.table("orders").insert(
                {
                    "code": order.code,
                    "owner_email": order.owner,
                    "status": order.status.value,
                    "lines_json": [
                        {"item_code": line.item_code, "quantity": line.quantity}
                        for line in order.lines
                    ],
                    "created_at": order.created_at.isoformat(),
                }
            ),
            "Failed to create order",
        )
        return _parse_order(rows[0])

    def get_order(self, code: str) -> Order | None:
        """Return an order by code, if present."""
        rows = execute_read(
            self.client.table("orders").select(_COLUMNS).eq("code", code).limit(1),
            "Failed to read order",
        )
        if not rows:
            return None
        return _parse_order(rows[0])

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        """Return orders with a status, oldest first."""
        rows = execute_read(
            self.client.table("orders")
            .select(_COLUMNS)
            .eq("status", status.value)
            .order("created_at"),
            "Failed to list orders by status",
        )
        return [_parse_order(row) for row in rows]

    def list_for_owner(self, owner: str) -> list[Order]:
        """Return an owner's orders, newest first."""
        rows = execute_read(
            self.client.table("orders")
            .select(_COLUMNS)
            .eq("owner_email", owner)
            .order("created_at", desc=True),
            "Failed to list orders for owner",
        )
        return [_parse_order(row) for row in rows]

    def update_status(self, code: str, status: OrderStatus) -> None:
        """Set the status column of an order row."""
        execute_write(
            self.client.table("orders").update({"status": status.value}).eq("code", code),
            "Failed to update order status",
        )


def _parse_order(row: dict[str, object]) -> Order:
    """Parse an order row into a domain model."""
    raw_lines = row.get("lines_json") or []
    lines = [
        OrderLine(item_code=int(line["item_code"]), quantity=int(line["quantity"]))
        for line in raw_lines
        if isinstance(line, dict)
    ]
    return Order(
        code=str(row["code"]),
        owner=str(row["owner_email"]),
        status=OrderStatus(row["status"]),
        lines=lines,
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
