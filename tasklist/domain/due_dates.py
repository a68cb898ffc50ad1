from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from .entities import TaskEntity

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def as_date(value: date | datetime) -> date:
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def is_overdue(task: TaskEntity, now: date | datetime) -> bool:
    if task.due_date is None or task.completed:
        return False
    return task.due_date < as_date(now)


def format_due_date(due_date: Optional[date], now: date | datetime) -> str | None:
    """Human label for a due date relative to ``now``.

    "Today" and "Tomorrow" for the two nearest days, otherwise a short
    "Jun 5" form, with the year appended when it differs from ``now``.
    """
    if due_date is None:
        return None

    today = as_date(now)
    if due_date == today:
        return "Today"
    if due_date == today + timedelta(days=1):
        return "Tomorrow"

    label = f"{_MONTH_ABBR[due_date.month - 1]} {due_date.day}"
    if due_date.year != today.year:
        label = f"{label}, {due_date.year}"
    return label
