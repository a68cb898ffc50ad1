from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from .due_dates import as_date, is_overdue
from .entities import TaskEntity
from .enums import ALL_CATEGORIES, StatusFilter
from .filters import parse_status_filter


def _matches_status(task: TaskEntity, status: StatusFilter, today: date) -> bool:
    if status == StatusFilter.COMPLETED:
        return task.completed
    if status == StatusFilter.PENDING:
        return not task.completed
    if status == StatusFilter.OVERDUE:
        return is_overdue(task, today)
    return True


def sort_key(task: TaskEntity) -> tuple:
    return (
        task.completed,
        task.priority.rank,
        task.due_date is None,
        task.due_date or date.min,
    )


def compute_view(
    tasks: Iterable[TaskEntity],
    status_filter: StatusFilter | str = StatusFilter.ALL,
    category_filter: str = ALL_CATEGORIES,
    today: date | datetime | None = None,
) -> list[TaskEntity]:
    """Filter ``tasks`` by status and category and order them for display.

    Incomplete work comes first, then higher priority, then earlier due
    dates with undated tasks last. ``sorted`` is stable, so full ties keep
    their input order.
    """
    status = parse_status_filter(status_filter)
    current = as_date(today) if today is not None else date.today()

    filtered = [task for task in tasks if _matches_status(task, status, current)]
    if category_filter != ALL_CATEGORIES:
        filtered = [task for task in filtered if task.category == category_filter]

    return sorted(filtered, key=sort_key)
