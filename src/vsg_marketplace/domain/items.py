"""Domain models for marketplace items."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Category(Enum):
    """Item categories."""

    LAPTOPS = "laptops"
    FURNITURE = "furniture"
    MULTIMEDIA = "multimedia"
    OTHERS = "others"


@dataclass(frozen=True)
class Item:
    """Represents an item offered in the marketplace."""

    code: int
    name: str
    price: Decimal
    category: Category
    quantity: int
    quantity_for_sale: int = 0
    description: str | None = None
    image_id: str | None = None


@dataclass(frozen=True)
class NewItem:
    """Payload for creating an item."""

    code: int
    name: str
    price: Decimal
    category: Category
    quantity: int
    quantity_for_sale: int | None = None
    description: str | None = None


@dataclass(frozen=True)
class MarketplaceItem:
    """Public listing view of an item."""

    code: int
    name: str
    price: Decimal
    category: Category
    quantity_for_sale: int
    image_url: str | None
