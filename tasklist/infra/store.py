from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

from tasklist.domain.clock import Clock, SystemClock
from tasklist.domain.entities import TaskEntity
from tasklist.domain.enums import DEFAULT_CATEGORY, DEFAULT_PRIORITY, Priority
from tasklist.domain.errors import NotFoundError, ValidationError


def _normalize_title(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("title must not be empty")
    return cleaned


def _normalize_category(category: str | None) -> str:
    return (category or "").strip() or DEFAULT_CATEGORY


def _normalize_priority(priority: Priority | str | None) -> Priority:
    if priority is None:
        return DEFAULT_PRIORITY
    try:
        return Priority(str(priority).strip().lower())
    except ValueError as exc:
        raise ValidationError(f"unknown priority: {priority!r}") from exc


def _normalize_due_date(due_date: date | str | None) -> Optional[date]:
    if due_date is None:
        return None
    if isinstance(due_date, datetime):
        return due_date.date()
    if isinstance(due_date, date):
        return due_date
    raw = str(due_date).strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError(f"invalid due date: {due_date!r}") from exc


class TaskStore:
    """Authoritative in-memory task list with a monotonic id generator."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._tasks: list[TaskEntity] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._tasks)

    def list_tasks(self) -> list[TaskEntity]:
        return list(self._tasks)

    def get_task(self, task_id: int) -> TaskEntity | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def add_task(
        self,
        title: str,
        category: str | None = None,
        priority: Priority | str | None = None,
        due_date: date | str | None = None,
    ) -> TaskEntity:
        # validate everything before the id is allocated
        task = TaskEntity(
            id=0,
            title=_normalize_title(title),
            category=_normalize_category(category),
            priority=_normalize_priority(priority),
            due_date=_normalize_due_date(due_date),
            completed=False,
            created_at=self._clock.now(),
            completed_at=None,
        )
        task = replace(task, id=self._next_id)
        self._next_id += 1
        self._tasks.append(task)
        return task

    def toggle_complete(self, task_id: int) -> TaskEntity:
        index = self._index_of(task_id)
        task = self._tasks[index]
        completed = not task.completed
        updated = replace(
            task,
            completed=completed,
            completed_at=self._clock.now() if completed else None,
        )
        self._tasks[index] = updated
        return updated

    def delete_task(self, task_id: int) -> None:
        index = self._index_of(task_id)
        del self._tasks[index]

    def replace_all(self, tasks: Iterable[TaskEntity]) -> None:
        loaded = list(tasks)
        ids = [task.id for task in loaded]
        if len(set(ids)) != len(ids):
            raise ValidationError("duplicate task ids in loaded data")
        self._tasks = loaded
        if ids:
            self._next_id = max(self._next_id, max(ids) + 1)

    def _index_of(self, task_id: int) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise NotFoundError(task_id)
