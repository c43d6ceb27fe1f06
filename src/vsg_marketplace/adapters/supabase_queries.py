"""Shared query execution for Supabase repositories."""

from typing import Any

from postgrest.exceptions import APIError

from vsg_marketplace.errors import StoreReadFailed, StoreWriteFailed


def execute_read(query: Any, message: str) -> list:
    """Execute a read query, translating failures into StoreReadFailed."""
    try:
        response = query.execute()
    except APIError as exc:
        raise StoreReadFailed(f"{message}: {exc.message}") from exc
    return response.data or []


def execute_write(query: Any, message: str, *, require_rows: bool = True) -> list:
    """Execute a write query, translating failures into StoreWriteFailed."""
    try:
        response = query.execute()
    except APIError as exc:
        raise StoreWriteFailed(f"{message}: {exc.message}") from exc
    if require_rows and not response.data:
        raise StoreWriteFailed(message)
    return response.data or []
