"""
Tests for the board page and its form handlers.

Covers:
1. GET / rendering (empty state, listings, escaping)
2. Category and task form posts (redirects, 400s, 500s)
3. The end-to-end Work / Write report scenario
"""
from unittest.mock import patch

from django.db import OperationalError
from django.test import TestCase, Client, override_settings
from django.utils import timezone

from apps.categories.models import Category
from apps.tasks.models import Task


@override_settings(TASKBOARD_SCHEMA_CONTROLS=False)
class BoardPageTest(TestCase):
    def setUp(self):
        self.client = Client()

    def test_index_empty(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'board/index.html')
        self.assertContains(response, 'No categories found')
        self.assertContains(response, 'No tasks found')
        self.assertContains(response, 'Select a category')
        self.assertNotContains(response, 'Delete tables')

    def test_index_lists_categories_in_selector(self):
        work = Category.objects.create(name='Work')
        response = self.client.get('/')
        self.assertContains(response, f'<option value="{work.id}">Work</option>', html=True)

    def test_index_escapes_user_content(self):
        Category.objects.create(name='<b>bold</b>')
        response = self.client.get('/')
        self.assertNotContains(response, '<b>bold</b>')
        self.assertContains(response, '&lt;b&gt;bold&lt;/b&gt;')

    def test_index_survives_read_failure(self):
        Category.objects.create(name='Work')
        with patch.object(Task.objects, 'select_related', side_effect=OperationalError('no such table')):
            response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'No tasks found')
        self.assertContains(response, 'Work')

    def test_index_rejects_post(self):
        response = self.client.post('/')
        self.assertEqual(response.status_code, 405)


class CategoryFormTest(TestCase):
    def setUp(self):
        self.client = Client()

    def test_create_category_redirects(self):
        response = self.client.post('/categories', {'name': 'Work'})
        self.assertRedirects(response, '/', fetch_redirect_response=False)
        self.assertEqual(response.status_code, 302)
        self.assertTrue(Category.objects.filter(name='Work').exists())

    def test_create_category_missing_name(self):
        response = self.client.post('/categories', {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.content.decode(), 'Category name is required')
        self.assertEqual(response['Content-Type'], 'text/plain; charset=utf-8')

    def test_create_duplicate_category(self):
        Category.objects.create(name='Work')
        response = self.client.post('/categories', {'name': 'Work'})
        self.assertEqual(response.status_code, 500)
        self.assertTrue(response.content.decode().startswith('Error creating category: '))
        self.assertEqual(Category.objects.filter(name='Work').count(), 1)

    def test_delete_category(self):
        category = Category.objects.create(name='Work')
        tasks = [Task.objects.create(title=f't{i}', category=category) for i in range(2)]

        response = self.client.post(f'/categories/{category.id}/delete')
        self.assertEqual(response.status_code, 302)
        self.assertEqual(Category.objects.count(), 0)
        for task in tasks:
            task.refresh_from_db()
            self.assertIsNone(task.category_id)

    def test_delete_missing_category(self):
        response = self.client.post('/categories/9999/delete')
        self.assertEqual(response.status_code, 302)

    def test_delete_category_storage_error(self):
        with patch('apps.board.views.category_services.delete_category',
                   side_effect=OperationalError('database is locked')):
            response = self.client.post('/categories/1/delete')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.content.decode(), 'Error deleting category: database is locked')

    def test_non_integer_id_is_not_routed(self):
        response = self.client.post('/categories/abc/delete')
        self.assertEqual(response.status_code, 404)


class TaskFormTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.category = Category.objects.create(name='Groceries')

    def test_create_task(self):
        before = timezone.now()
        response = self.client.post('/tasks', {'title': 'Buy milk', 'category_id': str(self.category.id)})
        self.assertEqual(response.status_code, 302)

        task = Task.objects.get()
        self.assertEqual(task.title, 'Buy milk')
        self.assertFalse(task.done)
        self.assertGreaterEqual(task.created_at, before)
        self.assertEqual(task.category_id, self.category.id)

    def test_create_task_empty_title(self):
        response = self.client.post('/tasks', {'title': '', 'category_id': str(self.category.id)})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.content.decode(), 'Task title is required')
        self.assertFalse(Task.objects.exists())

    def test_create_task_missing_category(self):
        response = self.client.post('/tasks', {'title': 'Buy milk', 'category_id': ''})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.content.decode(), 'Category selection is required')
        self.assertFalse(Task.objects.exists())

    def test_create_task_unknown_category(self):
        response = self.client.post('/tasks', {'title': 'Buy milk', 'category_id': '9999'})
        self.assertEqual(response.status_code, 500)
        self.assertTrue(response.content.decode().startswith('Error creating task: '))
        self.assertFalse(Task.objects.exists())

    def test_toggle_twice_restores_state(self):
        task = Task.objects.create(title='Buy milk', category=self.category)

        self.assertEqual(self.client.post(f'/tasks/{task.id}/toggle').status_code, 302)
        task.refresh_from_db()
        self.assertTrue(task.done)

        self.assertEqual(self.client.post(f'/tasks/{task.id}/toggle').status_code, 302)
        task.refresh_from_db()
        self.assertFalse(task.done)

    def test_delete_task_then_noops(self):
        task = Task.objects.create(title='Buy milk', category=self.category)

        self.assertEqual(self.client.post(f'/tasks/{task.id}/delete').status_code, 302)
        self.assertFalse(Task.objects.exists())
        self.assertNotContains(self.client.get('/'), 'Buy milk')

        self.assertEqual(self.client.post(f'/tasks/{task.id}/toggle').status_code, 302)
        self.assertEqual(self.client.post(f'/tasks/{task.id}/delete').status_code, 302)

    def test_toggle_storage_error(self):
        with patch('apps.board.views.task_services.toggle_task',
                   side_effect=OperationalError('connection refused')):
            response = self.client.post('/tasks/1/toggle')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.content.decode(), 'Error toggling task status: connection refused')


class BoardScenarioTest(TestCase):
    """Walk the whole board through create, toggle and category removal."""

    def setUp(self):
        self.client = Client()

    def task_row(self, response, task_id):
        html = response.content.decode()
        start = html.index(f'data-task-id="{task_id}"')
        return html[start:html.index('</tr>', start)]

    def test_work_scenario(self):
        response = self.client.post('/categories', {'name': 'Work'})
        self.assertRedirects(response, '/', fetch_redirect_response=False)

        work = Category.objects.get(name='Work')
        response = self.client.get('/')
        self.assertContains(response, f'<td style="padding: 8px;">{work.id}</td>', html=True)
        self.assertContains(response, '<td style="padding: 8px;">Work</td>', html=True)

        response = self.client.post('/tasks', {'title': 'Write report', 'category_id': str(work.id)})
        self.assertRedirects(response, '/', fetch_redirect_response=False)

        task = Task.objects.get(title='Write report')
        row = self.task_row(self.client.get('/'), task.id)
        self.assertIn('Write report', row)
        self.assertIn('data-done="false"', row)
        self.assertIn('❌', row)
        self.assertIn('<td style="padding: 8px;">Work</td>', row)

        self.client.post(f'/tasks/{task.id}/toggle')
        row = self.task_row(self.client.get('/'), task.id)
        self.assertIn('data-done="true"', row)
        self.assertIn('✅', row)

        self.client.post(f'/categories/{work.id}/delete')
        response = self.client.get('/')
        row = self.task_row(response, task.id)
        self.assertIn('<td style="padding: 8px;">-</td>', row)
        self.assertContains(response, 'No categories found')
