from typing import Any, Optional
from ninja import Schema
from ninja.orm import create_schema
from .models import Category

CategoryOut = create_schema(Category, fields=['id', 'name'])


class CategoryIn(Schema):
    # Untyped so a missing or non-string name reaches the service as a 400
    name: Optional[Any] = None
