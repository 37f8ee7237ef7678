"""
Board views: one HTML page plus the form handlers that mutate it.

Every write redirects back to the page; failures come back as plain text
(400 for bad input, 500 with the database message for storage errors).
"""
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.categories import services as category_services
from apps.core.schema_service import SchemaService
from apps.tasks import services as task_services

logger = logging.getLogger(__name__)


def _text(message: str, status: int) -> HttpResponse:
    return HttpResponse(message, status=status, content_type='text/plain; charset=utf-8')


def _storage_error(prefix: str, error: Exception) -> HttpResponse:
    logger.error(f"{prefix}: {error}")
    return _text(f"{prefix}: {error}", 500)


def _require_schema_controls():
    if not settings.TASKBOARD_SCHEMA_CONTROLS:
        raise Http404("Schema controls are disabled")


@require_GET
def index(request: HttpRequest):
    schema_controls = settings.TASKBOARD_SCHEMA_CONTROLS

    if schema_controls and not SchemaService.tables_exist():
        return render(request, 'board/index.html', {
            'schema_controls': True,
            'tables_exist': False,
        })

    context = {
        'schema_controls': schema_controls,
        'tables_exist': True,
        'tasks': task_services.list_tasks(),
        'categories': category_services.list_categories(),
    }
    return render(request, 'board/index.html', context)


@csrf_exempt
@require_POST
def create_category(request: HttpRequest):
    try:
        category_services.create_category(request.POST.get('name'))
    except ValidationError as e:
        return _text(e.messages[0], 400)
    except DatabaseError as e:
        return _storage_error("Error creating category", e)
    return redirect('board:index')


@csrf_exempt
@require_POST
def delete_category(request: HttpRequest, category_id: int):
    try:
        category_services.delete_category(category_id)
    except DatabaseError as e:
        return _storage_error("Error deleting category", e)
    return redirect('board:index')


@csrf_exempt
@require_POST
def create_task(request: HttpRequest):
    try:
        task_services.create_task(
            request.POST.get('title'),
            request.POST.get('category_id'),
        )
    except ValidationError as e:
        return _text(e.messages[0], 400)
    except DatabaseError as e:
        return _storage_error("Error creating task", e)
    return redirect('board:index')


@csrf_exempt
@require_POST
def toggle_task(request: HttpRequest, task_id: int):
    try:
        task_services.toggle_task(task_id)
    except DatabaseError as e:
        return _storage_error("Error toggling task status", e)
    return redirect('board:index')


@csrf_exempt
@require_POST
def delete_task(request: HttpRequest, task_id: int):
    try:
        task_services.delete_task(task_id)
    except DatabaseError as e:
        return _storage_error("Error deleting task", e)
    return redirect('board:index')


@csrf_exempt
@require_POST
def create_tables(request: HttpRequest):
    _require_schema_controls()
    try:
        SchemaService.create_tables()
    except DatabaseError as e:
        return _storage_error("Error creating tables", e)
    return redirect('board:index')


@csrf_exempt
@require_POST
def delete_tables(request: HttpRequest):
    _require_schema_controls()
    try:
        SchemaService.drop_tables()
    except DatabaseError as e:
        return _storage_error("Error deleting tables", e)
    return redirect('board:index')
