from io import StringIO

from django.core.management import call_command
from django.db import connection
from django.test import TestCase, TransactionTestCase

from apps.categories.models import Category
from apps.core.schema_service import SchemaService
from apps.tasks.models import Task


class SchemaServiceTest(TestCase):
    def test_table_names(self):
        self.assertEqual(SchemaService.table_names(), ['categories', 'tasks'])

    def test_tables_exist_after_migrations(self):
        self.assertTrue(SchemaService.tables_exist())

    def test_create_is_noop_when_present(self):
        self.assertEqual(SchemaService.create_tables(), [])

    def test_status_command(self):
        out = StringIO()
        call_command('board_schema', 'status', stdout=out)
        self.assertIn('Board tables present', out.getvalue())


class SchemaProvisioningTest(TransactionTestCase):
    def setUp(self):
        self.addCleanup(SchemaService.create_tables)

    def test_drop_and_create_round(self):
        self.assertEqual(SchemaService.drop_tables(), ['tasks', 'categories'])
        self.assertFalse(SchemaService.tables_exist())
        self.assertNotIn('tasks', connection.introspection.table_names())
        self.assertEqual(SchemaService.drop_tables(), [])

        self.assertEqual(SchemaService.create_tables(), ['categories', 'tasks'])
        self.assertTrue(SchemaService.tables_exist())

        # Recreated tables keep the database-level SET NULL
        work = Category.objects.create(name='Work')
        task = Task.objects.create(title='Write report', category=work)
        with connection.cursor() as cursor:
            cursor.execute('DELETE FROM categories WHERE id = %s', [work.id])
        task.refresh_from_db()
        self.assertIsNone(task.category_id)

    def test_create_only_missing_table(self):
        with connection.schema_editor() as editor:
            editor.delete_model(Task)

        self.assertFalse(SchemaService.tables_exist())
        self.assertEqual(SchemaService.create_tables(), ['tasks'])
        self.assertTrue(SchemaService.tables_exist())

    def test_commands(self):
        out = StringIO()
        call_command('board_schema', 'drop', stdout=out)
        self.assertIn('Dropped: tasks, categories', out.getvalue())

        out = StringIO()
        call_command('board_schema', 'status', stdout=out)
        self.assertIn('Board tables missing', out.getvalue())

        out = StringIO()
        call_command('board_schema', 'create', stdout=out)
        self.assertIn('Created: categories, tasks', out.getvalue())
