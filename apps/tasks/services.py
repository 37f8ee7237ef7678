"""
Services for the Tasks app.

Every write is a single statement; reads never raise.
"""
import logging
from typing import List

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Case, Value, When

from apps.categories.services import get_category_dto
from .models import Task

logger = logging.getLogger(__name__)


def list_tasks() -> List[Task]:
    """
    List all tasks, newest first, with their category joined in.

    Uncategorised tasks have ``category_name`` of None. A storage failure is
    logged and an empty list is returned so the page still renders.
    """
    try:
        return list(
            Task.objects.select_related('category').order_by('-created_at', '-id')
        )
    except DatabaseError as e:
        logger.error(f"Error fetching tasks: {e}")
        return []


def _parse_category_id(category_id) -> int:
    if category_id is None or (isinstance(category_id, str) and not category_id.strip()):
        raise ValidationError("Category selection is required", code="required")
    if isinstance(category_id, bool):
        raise ValidationError("Category selection is invalid", code="invalid")
    try:
        return int(category_id)
    except (TypeError, ValueError):
        raise ValidationError("Category selection is invalid", code="invalid")


def create_task(title, category_id) -> Task:
    """
    Create a pending task under a category.

    Raises:
        ValidationError: title or category_id is missing, blank or malformed.
        DatabaseError: the insert was rejected, including a category_id that
            does not reference an existing category.
    """
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Task title is required", code="required")
    category_pk = _parse_category_id(category_id)

    # Foreign keys are checked at commit time, so an unknown category is
    # rejected up front to fail the same way on every backend.
    if get_category_dto(category_pk) is None:
        raise IntegrityError(
            f'insert on table "tasks" violates foreign key constraint: '
            f'category {category_pk} does not exist'
        )

    with transaction.atomic():
        task = Task.objects.create(title=title.strip(), category_id=category_pk)

    logger.info(f"Created task {task.id} in category {category_pk}")
    return task


def toggle_task(task_id: int) -> bool:
    """
    Flip ``done`` for a task in one UPDATE statement.
    Returns False when no task has that id.
    """
    updated = Task.objects.filter(id=task_id).update(
        done=Case(
            When(done=True, then=Value(False)),
            default=Value(True),
        )
    )
    if updated:
        logger.info(f"Toggled task {task_id}")
    return bool(updated)


def delete_task(task_id: int) -> bool:
    deleted, _ = Task.objects.filter(id=task_id).delete()
    if deleted:
        logger.info(f"Deleted task {task_id}")
    return bool(deleted)
