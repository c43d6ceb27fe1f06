"""Supabase-backed image metadata repository."""

from dataclasses import dataclass

from supabase import Client

from vsg_marketplace.adapters.supabase_queries import execute_read, execute_write
from vsg_marketplace.domain.images import ImageRecord
from vsg_marketplace.services.images import ImageRepository


@dataclass
class SupabaseImageRepository(ImageRepository):
    """Supabase implementation for image metadata persistence."""

    client: Client

    def create_image(self, record: ImageRecord) -> None:
        """Insert an image row."""
        execute_write(
            self.client.table("images").insert(
                {
                    "id": record.id,
                    "file_extension": record.extension,
                    "item_code": record.item_code,
                }
            ),
            "Failed to create image metadata",
        )

    def get_extension(self, image_id: str) -> str | None:
        """Return the stored file extension for an image."""
        rows = execute_read(
            self.client.table("images")
            .select("file_extension")
            .eq("id", image_id)
            .limit(1),
            "Failed to read image extension",
        )
        if not rows:
            return None
        return rows[0].get("file_extension")

    def update_extension(self, image_id: str, extension: str) -> None:
        """Update only the file extension of an image row."""
        execute_write(
            self.client.table("images")
            .update({"file_extension": extension})
            .eq("id", image_id),
            "Failed to update image extension",
        )

    def delete_image(self, image_id: str) -> None:
        """Delete an image row."""
        execute_write(
            self.client.table("images").delete().eq("id", image_id),
            "Failed to delete image metadata",
            require_rows=False,
        )

    def get_image_by_item_code(self, item_code: int) -> ImageRecord | None:
        """Return the image linked to an item, if present."""
        rows = execute_read(
            self.client.table("images")
            .select("id, file_extension, item_code")
            .eq("item_code", item_code)
            .limit(1),
            "Failed to read item image",
        )
        if not rows:
            return None
        row = rows[0]
        return ImageRecord(
            id=row["id"],
            extension=row.get("file_extension"),
            item_code=row.get("item_code"),
        )
