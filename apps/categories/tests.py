import json
from unittest.mock import patch

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, connection
from django.test import Client, TestCase

from apps.tasks.models import Task
from .models import Category
from .services import (
    create_category,
    delete_category,
    get_category_dto,
    list_categories,
)


class CategoryServiceTest(TestCase):
    def test_create_category_success(self):
        category = create_category("Work")
        self.assertEqual(category.name, "Work")
        self.assertIsNotNone(category.id)

        names = [c.name for c in list_categories()]
        self.assertEqual(names.count("Work"), 1)

    def test_create_category_strips_whitespace(self):
        category = create_category("  Home  ")
        self.assertEqual(category.name, "Home")

    def test_uniqueness_constraint(self):
        create_category("Work")

        # Duplicate should fail at the database
        with self.assertRaises(IntegrityError):
            create_category("Work")

        self.assertEqual(Category.objects.filter(name="Work").count(), 1)

    def test_missing_or_blank_name_rejected(self):
        for bad in (None, "", "   ", 42, ["Work"]):
            with self.subTest(name=bad):
                with self.assertRaises(ValidationError) as ctx:
                    create_category(bad)
                self.assertEqual(ctx.exception.messages[0], "Category name is required")

        self.assertEqual(Category.objects.count(), 0)

    def test_list_ordered_by_name(self):
        for name in ("Zeta", "Alpha", "Mango", "Beta"):
            create_category(name)

        names = [c.name for c in list_categories()]
        self.assertEqual(names, ["Alpha", "Beta", "Mango", "Zeta"])

    def test_list_returns_empty_on_storage_error(self):
        create_category("Work")
        with patch.object(Category.objects, 'order_by', side_effect=DatabaseError("connection lost")):
            self.assertEqual(list_categories(), [])

    def test_delete_category_clears_task_references(self):
        work = create_category("Work")
        other = create_category("Other")
        for title in ("a", "b", "c"):
            Task.objects.create(title=title, category=work)
        kept = Task.objects.create(title="d", category=other)

        self.assertTrue(delete_category(work.id))

        self.assertEqual(Category.objects.count(), 1)
        self.assertEqual(Task.objects.count(), 4)
        self.assertEqual(Task.objects.filter(category__isnull=True).count(), 3)
        kept.refresh_from_db()
        self.assertEqual(kept.category_id, other.id)

    def test_delete_missing_category_is_noop(self):
        create_category("Work")
        self.assertFalse(delete_category(9999))
        self.assertEqual(Category.objects.count(), 1)

    def test_get_category_dto(self):
        category = create_category("Work")
        dto = get_category_dto(category.id)
        self.assertEqual(dto.id, category.id)
        self.assertEqual(dto.name, "Work")
        self.assertIsNone(get_category_dto(9999))

    def test_database_clears_task_reference_on_raw_delete(self):
        work = create_category("Work")
        task = Task.objects.create(title="Write report", category=work)

        # Bypass the ORM: the foreign key itself must null the reference
        with connection.cursor() as cursor:
            cursor.execute("DELETE FROM categories WHERE id = %s", [work.id])

        task.refresh_from_db()
        self.assertIsNone(task.category_id)
        self.assertEqual(Category.objects.count(), 0)

    def test_database_defaults_on_raw_insert(self):
        with connection.cursor() as cursor:
            cursor.execute("INSERT INTO tasks (title) VALUES (%s)", ["Raw task"])

        task = Task.objects.get(title="Raw task")
        self.assertFalse(task.done)
        self.assertIsNotNone(task.created_at)
        self.assertIsNone(task.category_id)


class CategoryAPITest(TestCase):
    def setUp(self):
        self.client = Client()

    def post_json(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type='application/json')

    def test_create_and_list(self):
        response = self.post_json('/api/categories', {'name': 'Work'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['name'], 'Work')

        response = self.client.get('/api/categories')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([c['name'] for c in response.json()], ['Work'])

    def test_create_missing_name(self):
        response = self.post_json('/api/categories', {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'Category name is required')

    def test_create_non_string_name(self):
        response = self.post_json('/api/categories', {'name': 42})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'Category name is required')
        self.assertFalse(Category.objects.exists())

    def test_create_duplicate_name(self):
        Category.objects.create(name='Work')
        response = self.post_json('/api/categories', {'name': 'Work'})
        self.assertEqual(response.status_code, 500)
        self.assertTrue(response.json()['detail'].startswith('Error creating category: '))
        self.assertEqual(Category.objects.filter(name='Work').count(), 1)

    def test_delete(self):
        category = Category.objects.create(name='Work')
        task = Task.objects.create(title='Write report', category=category)

        response = self.client.delete(f'/api/categories/{category.id}')
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Category.objects.exists())
        task.refresh_from_db()
        self.assertIsNone(task.category_id)
