"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from vsg_marketplace.api.items import router as items_router
from vsg_marketplace.api.orders import router as orders_router
from vsg_marketplace.app_logging import configure_logging
from vsg_marketplace.containers import AppContainer
from vsg_marketplace.errors import (
    ImageHostFailed,
    InsufficientQuantity,
    InvalidState,
    MarketplaceError,
    NotFound,
    PermissionDenied,
    StoreReadFailed,
    StoreWriteFailed,
    UploadFailed,
)

ERROR_STATUS: dict[type[MarketplaceError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    PermissionDenied: status.HTTP_403_FORBIDDEN,
    InvalidState: status.HTTP_409_CONFLICT,
    InsufficientQuantity: status.HTTP_409_CONFLICT,
    UploadFailed: status.HTTP_502_BAD_GATEWAY,
    ImageHostFailed: status.HTTP_502_BAD_GATEWAY,
    StoreReadFailed: status.HTTP_503_SERVICE_UNAVAILABLE,
    StoreWriteFailed: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(items_router)
    app.include_router(orders_router)

    @app.exception_handler(MarketplaceError)
    async def marketplace_error(_request: Request, exc: MarketplaceError) -> JSONResponse:
        status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Request failed: %s", exc.message, extra={"kind": exc.kind})
        return JSONResponse(
            status_code=status_code,
            content={"kind": exc.kind, "message": exc.message},
        )

    @app.exception_handler(ValueError)
    async def invalid_value(_request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"kind": "ValidationError", "message": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
