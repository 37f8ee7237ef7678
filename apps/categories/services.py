"""
Services for the Categories app.
This is the public API for other apps to interact with categories.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from .models import Category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryDTO:
    """Data Transfer Object for Category - used for cross-app communication."""
    id: int
    name: str


def get_category_dto(category_id: int) -> Optional[CategoryDTO]:
    """
    Get a Category as a DTO for cross-app communication.
    Used by the tasks app to validate category references.
    """
    try:
        category = Category.objects.get(id=category_id)
        return CategoryDTO(id=category.id, name=category.name)
    except Category.DoesNotExist:
        return None


def list_categories() -> List[Category]:
    """
    List all categories ordered by name.

    A storage failure never breaks the page: it is logged and an empty
    list is returned instead.
    """
    try:
        return list(Category.objects.order_by('name'))
    except DatabaseError as e:
        logger.error(f"Error fetching categories: {e}")
        return []


def create_category(name) -> Category:
    """
    Create a category.

    Raises:
        ValidationError: name is missing, not a string or blank.
        DatabaseError: the insert was rejected (e.g. duplicate name).
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Category name is required", code="required")

    # Savepoint keeps a constraint violation from poisoning an outer transaction
    with transaction.atomic():
        category = Category.objects.create(name=name.strip())

    logger.info(f"Created category {category.id} ({category.name})")
    return category


def delete_category(category_id: int) -> bool:
    """
    Delete a category. The database's ON DELETE SET NULL keeps the tasks
    pointing at it and clears their category.
    Returns False when there was nothing to delete.
    """
    deleted, _ = Category.objects.filter(id=category_id).delete()
    if deleted:
        logger.info(f"Deleted category {category_id}")
    return bool(deleted)
