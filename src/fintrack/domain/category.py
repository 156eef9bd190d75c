"""Category domain service."""

import logging
from typing import Optional
from uuid import UUID

from fintrack.database.base import Database
from fintrack.domain.entities import Category
from fintrack.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    user_not_found,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        user_id: UUID,
        name: str,
        description: Optional[str] = None,
        parent_category_id: Optional[UUID] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Create a category.

        Args:
            user_id: Owner of the category
            name: Category name
            description: Optional description
            parent_category_id: Optional parent category ID
            icon: Optional icon name
            color: Optional #RGB or #RRGGBB color

        Returns:
            The stored category

        Raises:
            NotFoundError: If the user or the parent category doesn't exist
            ValidationError: If the parent belongs to another user
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))

        category = Category.create(
            name,
            user_id,
            description=description,
            parent_category_id=parent_category_id,
            icon=icon,
            color=color,
        )
        if parent_category_id is not None:
            self._check_parent(category, parent_category_id)

        self.db.save_category(category)
        logger.info("Created category %s '%s'", category.id, category.name)
        return category

    def get_category(self, category_id: UUID) -> Optional[Category]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category or None if not found
        """
        return self.db.get_category(category_id)

    def require_category(self, category_id: UUID) -> Category:
        """Get a category or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def list_categories(
        self, user_id: Optional[UUID] = None, parent_category_id: Optional[UUID] = None
    ) -> list[Category]:
        """List categories.

        Args:
            user_id: Optional owner to filter by
            parent_category_id: Optional parent category ID to filter by

        Returns:
            List of categories ordered by name
        """
        return self.db.list_categories(
            user_id=user_id, parent_category_id=parent_category_id
        )

    def update_category(
        self,
        category_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Update the fields that are provided.

        None leaves a field unchanged; an empty string clears description,
        icon or color.
        """
        category = self.require_category(category_id)
        if name is not None:
            category.update_name(name)
        if description is not None:
            category.update_description(description)
        if icon is not None or color is not None:
            category.update_appearance(
                category.icon if icon is None else icon,
                category.color if color is None else color,
            )
        self.db.save_category(category)
        return category

    def set_parent(self, category_id: UUID, parent_category_id: Optional[UUID]) -> Category:
        """Move a category under another one, or to the top level with None.

        Raises:
            NotFoundError: If either category doesn't exist
            ValidationError: If the move would create a cycle
        """
        category = self.require_category(category_id)
        if parent_category_id is not None:
            self._check_parent(category, parent_category_id)
        category.set_parent_category(parent_category_id)
        self.db.save_category(category)
        return category

    def activate_category(self, category_id: UUID) -> Category:
        category = self.require_category(category_id)
        category.activate()
        self.db.save_category(category)
        return category

    def deactivate_category(self, category_id: UUID) -> Category:
        category = self.require_category(category_id)
        category.deactivate()
        self.db.save_category(category)
        return category

    def delete_category(self, category_id: UUID) -> None:
        """Delete a category that no transaction or subcategory references."""
        self.db.delete_category(category_id)
        logger.info("Deleted category %s", category_id)

    def format_category_path(self, category_id: UUID) -> str:
        """Get full path for a category.

        Args:
            category_id: Category ID

        Returns:
            Full category path (e.g., "Food & Dining > Groceries")
        """
        cat = self.get_category(category_id)
        if cat is None:
            return ""

        path_parts = [cat.name]
        seen = {cat.id}
        current_parent_id = cat.parent_category_id

        while current_parent_id is not None and current_parent_id not in seen:
            parent = self.get_category(current_parent_id)
            if parent is None:
                break
            path_parts.append(parent.name)
            seen.add(parent.id)
            current_parent_id = parent.parent_category_id

        return " > ".join(reversed(path_parts))

    def _check_parent(self, category: Category, parent_category_id: UUID) -> None:
        parent = self.require_category(parent_category_id)
        if parent.user_id != category.user_id:
            raise ValidationError("Parent category belongs to another user.")

        # Walk up from the new parent; meeting the category itself means a cycle
        current = parent
        while current.parent_category_id is not None:
            if current.parent_category_id == category.id:
                raise ValidationError(
                    f"Category {category.id} cannot be placed under its own descendant."
                )
            current = self.db.get_category(current.parent_category_id)
            if current is None:
                break
