from django.db import models


class Category(models.Model):
    """
    A named bucket for tasks.
    Deleting a category keeps its tasks and clears their reference.
    """
    id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = 'categories'
        ordering = ['name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name
