import django.db.models.deletion
import django.db.models.functions.datetime
from django.db import migrations, models

from apps.tasks.schema import install_category_set_null


def install_set_null(apps, schema_editor):
    install_category_set_null(schema_editor)


class Migration(migrations.Migration):

    dependencies = [
        ('categories', '0001_initial'),
        ('tasks', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='task',
            name='done',
            field=models.BooleanField(db_default=False, default=False),
        ),
        migrations.AlterField(
            model_name='task',
            name='created_at',
            field=models.DateTimeField(auto_now_add=True, db_default=django.db.models.functions.datetime.Now()),
        ),
        migrations.AlterField(
            model_name='task',
            name='category',
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='tasks', to='categories.category'),
        ),
        # Must run after the AlterFields: SQLite rebuilds the table for them
        migrations.RunPython(install_set_null, migrations.RunPython.noop),
    ]
