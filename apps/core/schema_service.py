"""
SchemaService - table existence check and idempotent provisioning.

Backs the optional "Create tables" / "Delete tables" toggle on the board
page and the ``board_schema`` management command.

Usage:
    from apps.core.schema_service import SchemaService

    if not SchemaService.tables_exist():
        SchemaService.create_tables()

Tables are created in dependency order (categories, then tasks) and dropped
in reverse. A freshly created tasks table gets ON DELETE SET NULL on its
category reference, as the migrations install it. Both operations skip
tables that are already in the wanted state, so calling them repeatedly is
safe.
"""
import logging
from typing import List

from django.db import DatabaseError, connection

from apps.categories.models import Category
from apps.tasks.models import Task
from apps.tasks.schema import install_category_set_null

logger = logging.getLogger(__name__)

# Creation order; teardown walks it backwards
BOARD_MODELS = (Category, Task)


class SchemaService:
    """Facade over Django's schema editor for the board tables."""

    @staticmethod
    def table_names() -> List[str]:
        return [model._meta.db_table for model in BOARD_MODELS]

    @staticmethod
    def _existing_tables() -> set:
        return set(connection.introspection.table_names())

    @staticmethod
    def tables_exist() -> bool:
        """
        True when every board table is present.

        An introspection failure counts as "absent" so the page can still
        offer to create the tables.
        """
        try:
            existing = SchemaService._existing_tables()
        except DatabaseError as e:
            logger.error(f"Error checking tables: {e}")
            return False
        return all(name in existing for name in SchemaService.table_names())

    @staticmethod
    def create_tables() -> List[str]:
        """
        Create whichever board tables are missing.

        Returns:
            Names of the tables that were created (empty if none were missing).
        """
        existing = SchemaService._existing_tables()
        missing = [m for m in BOARD_MODELS if m._meta.db_table not in existing]
        if missing:
            with connection.schema_editor() as editor:
                for model in missing:
                    editor.create_model(model)
        if Task in missing:
            # Runs once the editor has flushed the deferred FK and index SQL
            with connection.schema_editor() as editor:
                install_category_set_null(editor)
        created = [m._meta.db_table for m in missing]
        logger.info(f"Created tables: {created or 'none'}")
        return created

    @staticmethod
    def drop_tables() -> List[str]:
        """
        Drop whichever board tables are present, tasks first.

        Returns:
            Names of the tables that were dropped.
        """
        existing = SchemaService._existing_tables()
        present = [m for m in reversed(BOARD_MODELS) if m._meta.db_table in existing]
        if present:
            with connection.schema_editor() as editor:
                for model in present:
                    editor.delete_model(model)
        dropped = [m._meta.db_table for m in present]
        logger.info(f"Dropped tables: {dropped or 'none'}")
        return dropped
