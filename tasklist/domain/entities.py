from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .enums import Priority


@dataclass(frozen=True)
class TaskEntity:
    id: int
    title: str
    category: str
    priority: Priority
    due_date: Optional[date]
    completed: bool
    created_at: datetime
    completed_at: Optional[datetime]
