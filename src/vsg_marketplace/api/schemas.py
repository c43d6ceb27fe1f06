"""Request models and response serializers for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from vsg_marketplace.domain.display import display_name
from vsg_marketplace.domain.items import Item, MarketplaceItem
from vsg_marketplace.domain.orders import Order, OrderLine


class OrderLineIn(BaseModel):
    """Single requested order line."""

    model_config = ConfigDict(populate_by_name=True)

    item_code: int = Field(alias="itemCode")
    quantity: int = Field(gt=0)

    def to_domain(self) -> OrderLine:
        return OrderLine(item_code=self.item_code, quantity=self.quantity)


class CreateOrderIn(BaseModel):
    """Order creation payload."""

    lines: list[OrderLineIn] = Field(min_length=1)


def serialize_marketplace_item(item: MarketplaceItem) -> dict[str, object]:
    return {
        "code": item.code,
        "name": item.name,
        "imageURL": item.image_url,
        "price": str(item.price),
        "category": display_name(item.category),
        "quantityForSale": item.quantity_for_sale,
    }


def serialize_item(item: Item, image_url: str | None) -> dict[str, object]:
    return {
        "code": item.code,
        "name": item.name,
        "price": str(item.price),
        "category": display_name(item.category),
        "quantity": item.quantity,
        "quantityForSale": item.quantity_for_sale,
        "description": item.description,
        "imageURL": image_url,
    }


def serialize_order(order: Order) -> dict[str, object]:
    return {
        "code": order.code,
        "email": order.owner,
        "status": display_name(order.status),
        "createdAt": order.created_at.isoformat(),
        "lines": [
            {"itemCode": line.item_code, "quantity": line.quantity}
            for line in order.lines
        ],
    }
