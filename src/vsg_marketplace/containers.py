"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from vsg_marketplace.adapters.cloudinary_image_host import CloudinaryImageHost
from vsg_marketplace.adapters.supabase_image_repository import SupabaseImageRepository
from vsg_marketplace.adapters.supabase_item_repository import SupabaseItemRepository
from vsg_marketplace.adapters.supabase_order_repository import SupabaseOrderRepository
from vsg_marketplace.config import Settings
from vsg_marketplace.services.images import ImageService
from vsg_marketplace.services.items import ItemService
from vsg_marketplace.services.orders import OrderService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    image_service: ImageService
    item_service: ItemService
    order_service: OrderService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    image_host = CloudinaryImageHost(
        cloud_name=resolved_settings.cloudinary_cloud_name,
        api_key=resolved_settings.cloudinary_api_key,
        api_secret=resolved_settings.cloudinary_api_secret,
    )
    item_repository = SupabaseItemRepository(supabase_client)
    image_service = ImageService(
        host=image_host,
        repository=SupabaseImageRepository(supabase_client),
        folder=resolved_settings.cloudinary_folder,
    )
    item_service = ItemService(
        repository=item_repository,
        image_service=image_service,
    )
    order_service = OrderService(
        repository=SupabaseOrderRepository(supabase_client),
        item_repository=item_repository,
    )
    return AppContainer(
        settings=resolved_settings,
        image_service=image_service,
        item_service=item_service,
        order_service=order_service,
    )
