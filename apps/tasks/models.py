from django.db import models
from django.db.models.functions import Now

from apps.categories.models import Category


class Task(models.Model):
    """
    A to-do item, optionally filed under a Category.
    Only `done` changes after creation (Pending <-> Completed).
    """
    id = models.AutoField(primary_key=True)
    title = models.TextField()
    done = models.BooleanField(default=False, db_default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_default=Now())
    # The database clears this on category delete (ON DELETE SET NULL,
    # installed by apps.tasks.schema), so the ORM must not touch it.
    category = models.ForeignKey(
        Category,
        on_delete=models.DO_NOTHING,
        null=True,
        blank=True,
        related_name='tasks',
    )

    class Meta:
        db_table = 'tasks'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title

    @property
    def category_name(self):
        return self.category.name if self.category_id else None
