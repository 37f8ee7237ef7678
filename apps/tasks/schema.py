"""
Database-level ON DELETE SET NULL for tasks.category_id.

Django only emulates on_delete in Python, so the constraint it generates has
no referential action. ``install_category_set_null`` rewrites the constraint
so the database itself clears task references when a category row goes
away, whether the delete comes from the ORM or from plain SQL.

Called from the tasks migrations and from SchemaService.create_tables.
Any later AlterField on ``tasks`` that makes SQLite rebuild the table drops
the action again, so such a migration has to call this function afterwards.
"""
import logging
import re

logger = logging.getLogger(__name__)

CONSTRAINT_NAME = 'tasks_category_id_fkey'

_CREATE_TABLE = re.compile(r'^CREATE TABLE\s+"?tasks"?', re.IGNORECASE)
_REFERENCE = re.compile(r'REFERENCES\s+"?categories"?\s*\(\s*"?id"?\s*\)', re.IGNORECASE)


def install_category_set_null(schema_editor) -> None:
    vendor = schema_editor.connection.vendor
    if vendor == 'postgresql':
        _install_postgresql(schema_editor)
    elif vendor == 'sqlite':
        _install_sqlite(schema_editor)
    else:
        raise NotImplementedError(f"ON DELETE SET NULL is not wired up for {vendor}")
    logger.info(f"Installed ON DELETE SET NULL on tasks.category_id ({vendor})")


def _install_postgresql(schema_editor):
    connection = schema_editor.connection
    with connection.cursor() as cursor:
        constraints = connection.introspection.get_constraints(cursor, 'tasks')

    for name, info in constraints.items():
        if info['foreign_key'] and info['columns'] == ['category_id']:
            schema_editor.execute(f'ALTER TABLE "tasks" DROP CONSTRAINT "{name}"', None)

    schema_editor.execute(
        f'ALTER TABLE "tasks" ADD CONSTRAINT "{CONSTRAINT_NAME}" '
        f'FOREIGN KEY ("category_id") REFERENCES "categories" ("id") '
        f'ON DELETE SET NULL DEFERRABLE INITIALLY DEFERRED',
        None,
    )


def _install_sqlite(schema_editor):
    # SQLite can't alter a foreign key in place: rebuild the table from its
    # own DDL with the action added, then restore its indexes.
    connection = schema_editor.connection
    with connection.cursor() as cursor:
        cursor.execute(
            "SELECT sql FROM sqlite_master WHERE type = 'table' AND name = 'tasks'"
        )
        table_sql = cursor.fetchone()[0]
        cursor.execute(
            "SELECT sql FROM sqlite_master "
            "WHERE type = 'index' AND tbl_name = 'tasks' AND sql IS NOT NULL"
        )
        index_sql = [row[0] for row in cursor.fetchall()]

    if 'ON DELETE SET NULL' in table_sql.upper():
        return
    if not _REFERENCE.search(table_sql):
        raise RuntimeError(f"No categories reference found in tasks DDL: {table_sql}")

    new_sql = _REFERENCE.sub(
        lambda m: f'{m.group(0)} ON DELETE SET NULL', table_sql, count=1
    )
    new_sql = _CREATE_TABLE.sub('CREATE TABLE "tasks__new"', new_sql, count=1)

    schema_editor.execute(new_sql, None)
    schema_editor.execute('INSERT INTO "tasks__new" SELECT * FROM "tasks"', None)
    schema_editor.execute('DROP TABLE "tasks"', None)
    schema_editor.execute('ALTER TABLE "tasks__new" RENAME TO "tasks"', None)
    for sql in index_sql:
        schema_editor.execute(sql, None)
