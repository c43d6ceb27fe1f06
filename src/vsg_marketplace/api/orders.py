"""Order API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from vsg_marketplace.api.auth import get_caller, require_admin
from vsg_marketplace.api.schemas import CreateOrderIn, serialize_order
from vsg_marketplace.domain.callers import Caller

if TYPE_CHECKING:
    from vsg_marketplace.containers import AppContainer

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/pending")
async def pending_orders(
    request: Request, caller: Caller = Depends(require_admin)
) -> dict[str, object]:
    """Return pending orders of all users."""
    container: AppContainer = request.app.state.container
    orders = container.order_service.list_pending(caller.role)
    return {"orders": [serialize_order(order) for order in orders]}


@router.get("/mine")
async def my_orders(
    request: Request, caller: Caller = Depends(get_caller)
) -> dict[str, object]:
    """Return the caller's orders."""
    container: AppContainer = request.app.state.container
    orders = container.order_service.list_for_user(caller)
    return {"orders": [serialize_order(order) for order in orders]}


@router.post("")
async def create_order(
    payload: CreateOrderIn, request: Request, caller: Caller = Depends(get_caller)
) -> dict[str, object]:
    """Create a pending order for the caller."""
    container: AppContainer = request.app.state.container
    order = container.order_service.create(
        caller, [line.to_domain() for line in payload.lines]
    )
    return {"message": "Order created successfully.", "code": order.code}


@router.put("/{code}/finish")
async def finish_order(
    code: str, request: Request, caller: Caller = Depends(require_admin)
) -> dict[str, str]:
    """Mark a pending order as finished."""
    container: AppContainer = request.app.state.container
    container.order_service.finish(code, caller.role)
    return {"message": "Order finished successfully."}


@router.put("/{code}/decline")
async def decline_order(
    code: str, request: Request, caller: Caller = Depends(require_admin)
) -> dict[str, str]:
    """Mark a pending order as declined."""
    container: AppContainer = request.app.state.container
    container.order_service.decline(code, caller.role)
    return {"message": "Order declined successfully."}
