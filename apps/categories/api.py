"""
Categories API endpoints.

JSON mirror of the category half of the board page.
"""
import logging
from typing import List

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from .dtos import CategoryIn, CategoryOut
from .services import create_category, delete_category, list_categories

logger = logging.getLogger(__name__)

router = Router(tags=["Categories"])


@router.get("", response=List[CategoryOut])
def list_categories_api(request: HttpRequest):
    """List all categories ordered by name."""
    return list_categories()


@router.post("", response=CategoryOut)
def create_category_api(request: HttpRequest, payload: CategoryIn):
    """
    Create a category.

    - 400 when the name is missing or blank
    - 500 when the database rejects the insert (e.g. duplicate name)
    """
    try:
        return create_category(payload.name)
    except ValidationError as e:
        raise HttpError(400, e.messages[0])
    except DatabaseError as e:
        logger.error(f"Error creating category: {e}")
        raise HttpError(500, f"Error creating category: {e}")


@router.delete("/{category_id}", response={204: None})
def delete_category_api(request: HttpRequest, category_id: int):
    """Delete a category. Its tasks are kept and lose their category."""
    try:
        delete_category(category_id)
    except DatabaseError as e:
        logger.error(f"Error deleting category: {e}")
        raise HttpError(500, f"Error deleting category: {e}")
    return 204, None
