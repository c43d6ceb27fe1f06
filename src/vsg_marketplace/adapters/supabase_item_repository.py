"""Supabase-backed item repository."""

from dataclasses import dataclass
from decimal import Decimal

from supabase import Client

from vsg_marketplace.adapters.supabase_queries import execute_read, execute_write
from vsg_marketplace.domain.items import Category, Item
from vsg_marketplace.errors import NotFound
from vsg_marketplace.services.items import ItemRepository

_COLUMNS = (
    "code, name, price, category, quantity, quantity_for_sale, description, image_id"
)


@dataclass
class SupabaseItemRepository(ItemRepository):
    """Supabase implementation for item persistence."""

    client: Client

    def create_item(self, item: Item) -> Item:
        """Insert an item row and return it."""
        rows = execute_write(
            self.client.table("items").insert(
                {
                    "code": item.code,
                    "name": item.name,
                    "price": str(item.price),
                    "category": item.category.value,
                    "quantity": item.quantity,
                    "quantity_for_sale": item.quantity_for_sale,
                    "description": item.description,
                    "image_id": item.image_id,
                }
            ),
            "Failed to create item",
        )
        return _parse_item(rows[0])

    def get_item(self, code: int) -> Item | None:
        """Return an item by code, if present."""
        rows = execute_read(
            self.client.table("items").select(_COLUMNS).eq("code", code).limit(1),
            "Failed to read item",
        )
        if not rows:
            return None
        return _parse_item(rows[0])

    def list_items(self) -> list[Item]:
        """Return all items ordered by code."""
        rows = execute_read(
            self.client.table("items").select(_COLUMNS).order("code"),
            "Failed to list items",
        )
        return [_parse_item(row) for row in rows]

    def delete_item(self, code: int) -> None:
        """Delete an item row."""
        execute_write(
            self.client.table("items").delete().eq("code", code),
            "Failed to delete item",
            require_rows=False,
        )

    def adjust_quantities(
        self, code: int, quantity_delta: int = 0, quantity_for_sale_delta: int = 0
    ) -> None:
        """Apply quantity deltas to an item row."""
        rows = execute_read(
            self.client.table("items")
            .select("quantity, quantity_for_sale")
            .eq("code", code)
            .limit(1),
            "Failed to read item quantities",
        )
        if not rows:
            raise NotFound(f"Item {code} not found")
        row = rows[0]
        execute_write(
            self.client.table("items")
            .update(
                {
                    "quantity": int(row.get("quantity") or 0) + quantity_delta,
                    "quantity_for_sale": int(row.get("quantity_for_sale") or 0)
                    + quantity_for_sale_delta,
                }
            )
            .eq("code", code),
            "Failed to update item quantities",
        )


def _parse_item(row: dict[str, object]) -> Item:
    """Parse an item row into a domain model."""
    return Item(
        code=int(row["code"]),
        name=str(row["name"]),
        price=Decimal(str(row["price"])),
        category=Category(row["category"]),
        quantity=int(row.get("quantity") or 0),
        quantity_for_sale=int(row.get("quantity_for_sale") or 0),
        description=row.get("description"),
        image_id=row.get("image_id"),
    )
