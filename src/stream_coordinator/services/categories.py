"""Stream category lookup."""

from dataclasses import dataclass
from typing import Protocol


class CategoryRepository(Protocol):
    """Persistence interface for stream categories."""

    def get_id_by_name(self, name: str) -> str | None:
        """Return the category id for an exact name match, if present."""

    def create_category(self, name: str) -> str:
        """Create a category and return its id."""


@dataclass
class CategoryService:
    """Resolves category names to ids, creating categories on demand."""

    repository: CategoryRepository

    def ensure_category(self, name: str) -> str:
        """Ensure a category exists for the name and return its id."""
        existing = self.repository.get_id_by_name(name)
        if existing is not None:
            return existing
        return self.repository.create_category(name)
