"""Error kinds raised by the marketplace services."""


class MarketplaceError(Exception):
    """Base class for errors surfaced to the API layer."""

    kind = "MarketplaceError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.compensation_error: Exception | None = None


class UploadFailed(MarketplaceError):
    """The remote image host rejected a blob."""

    kind = "UploadFailed"


class ImageHostFailed(MarketplaceError):
    """The remote image host could not answer a lookup or delete."""

    kind = "ImageHostFailed"


class NotFound(MarketplaceError):
    """An image, item or order is absent, or a record is incomplete."""

    kind = "NotFound"


class InvalidState(MarketplaceError):
    """The requested transition is not allowed from the current state."""

    kind = "InvalidState"


class InsufficientQuantity(MarketplaceError):
    """An order line asks for more than is available for sale."""

    kind = "InsufficientQuantity"


class StoreWriteFailed(MarketplaceError):
    """Persisting metadata failed."""

    kind = "StoreWriteFailed"


class StoreReadFailed(MarketplaceError):
    """Reading metadata failed."""

    kind = "StoreReadFailed"


class PermissionDenied(MarketplaceError):
    """The caller lacks the role required for the operation."""

    kind = "PermissionDenied"
