"""
Tasks API endpoints.

JSON mirror of the task half of the board page.
"""
import logging
from typing import List

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from .dtos import TaskIn, TaskOut
from .services import create_task, delete_task, list_tasks, toggle_task

logger = logging.getLogger(__name__)

router = Router(tags=["Tasks"])


@router.get("", response=List[TaskOut])
def list_tasks_api(request: HttpRequest):
    """List all tasks, newest first, with their category name."""
    return list_tasks()


@router.post("", response=TaskOut)
def create_task_api(request: HttpRequest, payload: TaskIn):
    """
    Create a task.

    - 400 when the title or category is missing or blank
    - 500 when the database rejects the insert (e.g. unknown category)
    """
    try:
        return create_task(payload.title, payload.category_id)
    except ValidationError as e:
        raise HttpError(400, e.messages[0])
    except DatabaseError as e:
        logger.error(f"Error creating task: {e}")
        raise HttpError(500, f"Error creating task: {e}")


@router.post("/{task_id}/toggle", response={204: None})
def toggle_task_api(request: HttpRequest, task_id: int):
    """Flip a task between pending and completed."""
    try:
        toggle_task(task_id)
    except DatabaseError as e:
        logger.error(f"Error toggling task status: {e}")
        raise HttpError(500, f"Error toggling task status: {e}")
    return 204, None


@router.delete("/{task_id}", response={204: None})
def delete_task_api(request: HttpRequest, task_id: int):
    try:
        delete_task(task_id)
    except DatabaseError as e:
        logger.error(f"Error deleting task: {e}")
        raise HttpError(500, f"Error deleting task: {e}")
    return 204, None
