"""
URL configuration for Taskboard project.
"""
from django.contrib import admin
from django.urls import include, path
from ninja import NinjaAPI
from ninja.errors import ValidationError as SchemaValidationError

api = NinjaAPI(
    title="Taskboard API",
    version="1.0.0",
    description="JSON mirror of the task and category board",
    docs_url="/docs",
)


@api.exception_handler(SchemaValidationError)
def schema_validation_error(request, exc):
    """Malformed request bodies are client errors like any other bad input."""
    return api.create_response(request, {"detail": exc.errors}, status=400)


from apps.categories.api import router as categories_router
from apps.tasks.api import router as tasks_router

api.add_router("/categories", categories_router)
api.add_router("/tasks", tasks_router)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
    path('', include('apps.board.urls')),
]
