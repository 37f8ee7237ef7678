from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    path('', views.index, name='index'),
    path('categories', views.create_category, name='create_category'),
    path('categories/<int:category_id>/delete', views.delete_category, name='delete_category'),
    path('tasks', views.create_task, name='create_task'),
    path('tasks/<int:task_id>/toggle', views.toggle_task, name='toggle_task'),
    path('tasks/<int:task_id>/delete', views.delete_task, name='delete_task'),
    path('create-tables', views.create_tables, name='create_tables'),
    path('delete-tables', views.delete_tables, name='delete_tables'),
]
