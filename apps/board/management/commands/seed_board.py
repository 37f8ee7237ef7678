"""
Management command to seed sample categories and tasks for local development.
"""
from django.core.management.base import BaseCommand

from apps.categories.models import Category
from apps.tasks.models import Task

SAMPLE_BOARD = {
    'Work': ['Write report', 'Review pull requests'],
    'Personal': ['Buy milk', 'Call the dentist'],
    'Errands': ['Pick up dry cleaning'],
}


class Command(BaseCommand):
    help = 'Seeds the board with sample categories and tasks'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Delete every task and category before seeding',
        )

    def handle(self, *args, **options):
        if options.get('reset'):
            Task.objects.all().delete()
            Category.objects.all().delete()
            self.stdout.write(self.style.WARNING('Cleared all tasks and categories'))

        for name, titles in SAMPLE_BOARD.items():
            category, created = Category.objects.get_or_create(name=name)
            if created:
                self.stdout.write(self.style.SUCCESS(f'Created category: {name}'))

            for title in titles:
                _, created = Task.objects.get_or_create(title=title, category=category)
                if created:
                    self.stdout.write(self.style.SUCCESS(f'  Created task: {title}'))

        self.stdout.write(self.style.SUCCESS(
            f'Board has {Category.objects.count()} categories and {Task.objects.count()} tasks'
        ))
