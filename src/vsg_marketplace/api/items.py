"""Item and image API endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from vsg_marketplace.api.auth import get_caller, require_admin
from vsg_marketplace.api.schemas import serialize_item, serialize_marketplace_item
from vsg_marketplace.domain.callers import Caller
from vsg_marketplace.domain.display import from_display_name
from vsg_marketplace.domain.items import Category, NewItem

if TYPE_CHECKING:
    from vsg_marketplace.containers import AppContainer

router = APIRouter(tags=["items"])


@router.get("/items", dependencies=[Depends(get_caller)])
async def list_items(request: Request) -> dict[str, object]:
    """Return items available for ordering."""
    container: AppContainer = request.app.state.container
    items = container.item_service.list_marketplace()
    return {"items": [serialize_marketplace_item(item) for item in items]}


@router.get("/items/{code}", dependencies=[Depends(get_caller)])
async def get_item(code: int, request: Request) -> dict[str, object]:
    """Return a single item with its image URL."""
    container: AppContainer = request.app.state.container
    item = container.item_service.get(code)
    image_url = container.image_service.get_url_by_item_code(code)
    return serialize_item(item, image_url)


@router.post("/items")
async def create_item(  # noqa: PLR0913
    request: Request,
    code: Annotated[int, Form()],
    name: Annotated[str, Form()],
    price: Annotated[Decimal, Form()],
    category: Annotated[str, Form()],
    quantity: Annotated[int, Form()],
    caller: Caller = Depends(require_admin),
    quantity_for_sale: Annotated[int | None, Form(alias="quantityForSale")] = None,
    description: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> dict[str, object]:
    """Create an item, optionally uploading its image."""
    container: AppContainer = request.app.state.container
    payload = NewItem(
        code=code,
        name=name,
        price=price,
        category=from_display_name(Category, category),
        quantity=quantity,
        quantity_for_sale=quantity_for_sale,
        description=description,
    )
    image_bytes = await image.read() if image is not None else None
    item = container.item_service.create(payload, caller.role, image_bytes)
    image_url = container.image_service.get_url_by_item_code(item.code)
    return serialize_item(item, image_url)


@router.delete("/items/{code}")
async def delete_item(
    code: int, request: Request, caller: Caller = Depends(require_admin)
) -> dict[str, str]:
    """Delete an item and its image."""
    container: AppContainer = request.app.state.container
    container.item_service.delete(code, caller.role)
    return {"message": "Item deleted successfully."}


@router.put("/images/{public_id:path}", dependencies=[Depends(require_admin)])
async def update_image(
    public_id: str,
    request: Request,
    image: Annotated[UploadFile, File()],
) -> dict[str, str]:
    """Replace the blob of an existing image."""
    container: AppContainer = request.app.state.container
    container.image_service.update(public_id, await image.read())
    return {"message": "Image updated successfully."}


@router.delete("/images/{public_id:path}", dependencies=[Depends(require_admin)])
async def delete_image(public_id: str, request: Request) -> dict[str, str]:
    """Delete an image from the host and its metadata."""
    container: AppContainer = request.app.state.container
    container.image_service.delete(public_id)
    return {"message": "Image deleted successfully."}
