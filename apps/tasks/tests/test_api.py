"""
Integration tests for the task API endpoints.
"""
import json

from django.test import TestCase, Client

from apps.categories.models import Category
from apps.tasks.models import Task


class TaskAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.category = Category.objects.create(name='Work')

    def post_json(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type='application/json')

    def test_create_and_list(self):
        response = self.post_json('/api/tasks', {'title': 'Write report', 'category_id': self.category.id})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['title'], 'Write report')
        self.assertFalse(data['done'])
        self.assertEqual(data['category_id'], self.category.id)
        self.assertEqual(data['category_name'], 'Work')

        response = self.client.get('/api/tasks')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 1)
        self.assertIn('created_at', response.json()[0])

    def test_create_blank_title(self):
        response = self.post_json('/api/tasks', {'title': '', 'category_id': self.category.id})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'Task title is required')
        self.assertFalse(Task.objects.exists())

    def test_create_missing_category(self):
        response = self.post_json('/api/tasks', {'title': 'Write report'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'Category selection is required')

    def test_create_unknown_category(self):
        response = self.post_json('/api/tasks', {'title': 'Write report', 'category_id': 9999})
        self.assertEqual(response.status_code, 500)
        self.assertTrue(response.json()['detail'].startswith('Error creating task: '))
        self.assertFalse(Task.objects.exists())

    def test_toggle_and_delete(self):
        task = Task.objects.create(title='Write report', category=self.category)

        response = self.client.post(f'/api/tasks/{task.id}/toggle')
        self.assertEqual(response.status_code, 204)
        task.refresh_from_db()
        self.assertTrue(task.done)

        response = self.client.delete(f'/api/tasks/{task.id}')
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Task.objects.exists())

        # Unknown ids are still a success
        self.assertEqual(self.client.post(f'/api/tasks/{task.id}/toggle').status_code, 204)
        self.assertEqual(self.client.delete(f'/api/tasks/{task.id}').status_code, 204)

    def test_create_non_string_title(self):
        response = self.post_json('/api/tasks', {'title': 42, 'category_id': self.category.id})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'Task title is required')
        self.assertFalse(Task.objects.exists())

    def test_create_malformed_category(self):
        response = self.post_json('/api/tasks', {'title': 'Write report', 'category_id': [1]})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'Category selection is invalid')

    def test_create_body_not_an_object(self):
        response = self.post_json('/api/tasks', ['Write report'])
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Task.objects.exists())
