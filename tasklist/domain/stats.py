from __future__ import annotations

from typing import Iterable

from .entities import TaskEntity


def compute_stats(tasks: Iterable[TaskEntity]) -> dict[str, int]:
    total = 0
    completed = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
    return {
        "total": total,
        "completed": completed,
        "pending": total - completed,
    }
