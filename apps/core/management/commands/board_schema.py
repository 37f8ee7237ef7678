from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from apps.core.schema_service import SchemaService


class Command(BaseCommand):
    help = 'Checks, creates or drops the board tables (categories, tasks)'

    def add_arguments(self, parser):
        parser.add_argument(
            'action',
            choices=['status', 'create', 'drop'],
            help='status: report whether the tables exist; create/drop: provision or tear down',
        )

    def handle(self, *args, **options):
        action = options['action']

        if action == 'status':
            if SchemaService.tables_exist():
                self.stdout.write(self.style.SUCCESS('Board tables present'))
            else:
                self.stdout.write(self.style.WARNING('Board tables missing'))
            return

        try:
            if action == 'create':
                tables = SchemaService.create_tables()
                verb = 'Created'
            else:
                tables = SchemaService.drop_tables()
                verb = 'Dropped'
        except DatabaseError as e:
            raise CommandError(f'Error running {action}: {e}')

        if tables:
            self.stdout.write(self.style.SUCCESS(f'{verb}: {", ".join(tables)}'))
        else:
            self.stdout.write(self.style.WARNING(f'{verb}: nothing to do'))
