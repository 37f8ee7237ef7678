from ninja import Schema
from typing import Any, Optional
from datetime import datetime


class TaskOut(Schema):
    id: int
    title: str
    done: bool
    created_at: datetime
    category_id: Optional[int] = None
    category_name: Optional[str] = None


class TaskIn(Schema):
    # Untyped so bad or missing values reach the service and become a 400
    title: Optional[Any] = None
    category_id: Optional[Any] = None
