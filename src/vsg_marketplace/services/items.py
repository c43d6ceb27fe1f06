"""Marketplace item catalogue."""

import logging
from dataclasses import dataclass
from typing import Protocol

from vsg_marketplace.domain.callers import CallerRole
from vsg_marketplace.domain.items import Item, MarketplaceItem, NewItem
from vsg_marketplace.errors import (
    InvalidState,
    MarketplaceError,
    NotFound,
    PermissionDenied,
)
from vsg_marketplace.services.images import ImageService

logger = logging.getLogger(__name__)


class ItemRepository(Protocol):
    """Persistence interface for items."""

    def create_item(self, item: Item) -> Item:
        """Persist a new item and return it."""

    def get_item(self, code: int) -> Item | None:
        """Return an item by code, if present."""

    def list_items(self) -> list[Item]:
        """Return all items."""

    def delete_item(self, code: int) -> None:
        """Delete an item."""

    def adjust_quantities(
        self, code: int, quantity_delta: int = 0, quantity_for_sale_delta: int = 0
    ) -> None:
        """Add the deltas to an item's on-hand and for-sale quantities."""


def ensure_admin(role: CallerRole) -> None:
    """Reject callers without the admin role."""
    if role is not CallerRole.ADMIN:
        raise PermissionDenied("Admin role required")


@dataclass
class ItemService:
    """Application service for the item catalogue."""

    repository: ItemRepository
    image_service: ImageService

    def create(
        self, payload: NewItem, role: CallerRole, image_bytes: bytes | None = None
    ) -> Item:
        """Create an item, uploading its image first when one is given."""
        ensure_admin(role)
        quantity_for_sale = payload.quantity_for_sale or 0
        if payload.quantity < 0 or quantity_for_sale < 0:
            raise ValueError("Quantities must not be negative")
        if quantity_for_sale > payload.quantity:
            raise ValueError("Quantity for sale cannot exceed quantity")
        if self.repository.get_item(payload.code) is not None:
            raise InvalidState(f"Item {payload.code} already exists")

        image_id = None
        if image_bytes:
            image_id = self.image_service.upload(image_bytes, item_code=payload.code)

        item = Item(
            code=payload.code,
            name=payload.name,
            price=payload.price,
            category=payload.category,
            quantity=payload.quantity,
            quantity_for_sale=quantity_for_sale,
            description=payload.description,
            image_id=image_id,
        )
        try:
            return self.repository.create_item(item)
        except Exception as exc:
            if image_id is not None:
                self._remove_orphan_image(image_id, payload.code, exc)
            raise

    def _remove_orphan_image(
        self, image_id: str, item_code: int, cause: Exception
    ) -> None:
        logger.warning(
            "Item write failed, removing its image", extra={"item_code": item_code}
        )
        public_id = self.image_service.public_id_for(image_id)
        try:
            self.image_service.delete(public_id)
        except Exception as cleanup_error:
            logger.exception(
                "Removing image of unsaved item failed",
                extra={"item_code": item_code, "public_id": public_id},
            )
            if isinstance(cause, MarketplaceError):
                cause.compensation_error = cleanup_error
            cause.add_note(f"Removing image {public_id} failed: {cleanup_error}")

    def get(self, code: int) -> Item:
        """Return an item or raise NotFound."""
        item = self.repository.get_item(code)
        if item is None:
            raise NotFound(f"Item {code} not found")
        return item

    def list_marketplace(self) -> list[MarketplaceItem]:
        """Return items that can currently be ordered."""
        return [
            MarketplaceItem(
                code=item.code,
                name=item.name,
                price=item.price,
                category=item.category,
                quantity_for_sale=item.quantity_for_sale,
                image_url=self._image_url(item.code),
            )
            for item in self.repository.list_items()
            if item.quantity_for_sale > 0
        ]

    def _image_url(self, item_code: int) -> str | None:
        # An incomplete image record hides the picture, not the item.
        try:
            return self.image_service.get_url_by_item_code(item_code)
        except NotFound:
            logger.warning(
                "Item image record is incomplete", extra={"item_code": item_code}
            )
            return None

    def delete(self, code: int, role: CallerRole) -> None:
        """Delete an item together with its image."""
        ensure_admin(role)
        item = self.get(code)
        if item.image_id is not None:
            self.image_service.delete(self.image_service.public_id_for(item.image_id))
        self.repository.delete_item(code)
