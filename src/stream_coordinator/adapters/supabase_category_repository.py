"""Supabase-backed stream category repository."""

from dataclasses import dataclass

from supabase import Client

from stream_coordinator.services.categories import CategoryRepository


@dataclass
class SupabaseCategoryRepository(CategoryRepository):
    """Supabase implementation for stream categories."""

    client: Client

    def get_id_by_name(self, name: str) -> str | None:
        """Return the category id for an exact name match."""
        response = (
            self.client.table("stream_categories")
            .select("id")
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return str(response.data[0]["id"])

    def create_category(self, name: str) -> str:
        """Create a category row and return its id."""
        response = (
            self.client.table("stream_categories").insert({"name": name}).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create stream category")
        return str(response.data[0]["id"])
