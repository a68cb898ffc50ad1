from __future__ import annotations

import logging
from datetime import date
from typing import Protocol, Sequence

from tasklist.domain.clock import Clock, SystemClock
from tasklist.domain.due_dates import format_due_date, is_overdue
from tasklist.domain.entities import TaskEntity
from tasklist.domain.enums import Category, Priority, StatusFilter
from tasklist.domain.filters import TaskFilters, parse_status_filter
from tasklist.domain.stats import compute_stats
from tasklist.domain.view import compute_view
from tasklist.infra.store import TaskStore

logger = logging.getLogger(__name__)

SAMPLE_TASKS = [
    {
        "title": "Complete project proposal",
        "category": Category.WORK.value,
        "priority": Priority.HIGH,
        "due_date": date(2025, 6, 15),
        "completed": False,
    },
    {
        "title": "Buy groceries for the week",
        "category": Category.SHOPPING.value,
        "priority": Priority.MEDIUM,
        "due_date": date(2025, 6, 12),
        "completed": False,
    },
    {
        "title": "Schedule doctor appointment",
        "category": Category.HEALTH.value,
        "priority": Priority.MEDIUM,
        "due_date": None,
        "completed": True,
    },
]


class TaskPersistence(Protocol):
    def load(self) -> list[TaskEntity]: ...

    def save(self, tasks: Sequence[TaskEntity]) -> None: ...


class TaskService:
    def __init__(
        self,
        store: TaskStore,
        repo: TaskPersistence | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._repo = repo
        self._clock = clock or SystemClock()
        self._filters = TaskFilters()

    @property
    def filters(self) -> TaskFilters:
        return self._filters

    def list_tasks(self) -> list[TaskEntity]:
        return self._store.list_tasks()

    def get_task(self, task_id: int) -> TaskEntity | None:
        return self._store.get_task(task_id)

    def add_task(
        self,
        title: str,
        category: str | None = None,
        priority: Priority | str | None = None,
        due_date: date | str | None = None,
    ) -> TaskEntity:
        snapshot = self._store.list_tasks()
        task = self._store.add_task(title, category, priority, due_date)
        self._save_or_restore(snapshot)
        logger.info("Added task id=%s category=%s priority=%s", task.id, task.category, task.priority)
        return task

    def toggle_complete(self, task_id: int) -> TaskEntity:
        snapshot = self._store.list_tasks()
        task = self._store.toggle_complete(task_id)
        self._save_or_restore(snapshot)
        logger.info("Toggled task id=%s completed=%s", task.id, task.completed)
        return task

    def delete_task(self, task_id: int) -> None:
        snapshot = self._store.list_tasks()
        self._store.delete_task(task_id)
        self._save_or_restore(snapshot)
        logger.info("Deleted task id=%s", task_id)

    def set_filter(
        self,
        status: StatusFilter | str | None = None,
        category: str | None = None,
    ) -> TaskFilters:
        new_status = parse_status_filter(status) if status is not None else self._filters.status
        new_category = category if category is not None else self._filters.category
        self._filters = TaskFilters(status=new_status, category=new_category)
        return self._filters

    def compute_view(
        self,
        status: StatusFilter | str | None = None,
        category: str | None = None,
    ) -> list[TaskEntity]:
        return compute_view(
            self._store.list_tasks(),
            status if status is not None else self._filters.status,
            category if category is not None else self._filters.category,
            today=self._clock.now(),
        )

    def compute_stats(self) -> dict[str, int]:
        return compute_stats(self._store.list_tasks())

    def is_overdue(self, task: TaskEntity) -> bool:
        return is_overdue(task, self._clock.now())

    def format_due_date(self, task: TaskEntity) -> str | None:
        return format_due_date(task.due_date, self._clock.now())

    def load(self) -> int:
        if self._repo is None:
            return 0
        tasks = self._repo.load()
        self._store.replace_all(tasks)
        logger.info("Loaded %s tasks", len(tasks))
        return len(tasks)

    def save(self) -> None:
        if self._repo is None:
            return
        self._repo.save(self._store.list_tasks())

    def seed_sample_tasks(self) -> list[TaskEntity]:
        if len(self._store):
            return []

        snapshot = self._store.list_tasks()
        created = []
        for sample in SAMPLE_TASKS:
            task = self._store.add_task(
                sample["title"],
                sample["category"],
                sample["priority"],
                sample["due_date"],
            )
            if sample["completed"]:
                task = self._store.toggle_complete(task.id)
            created.append(task)
        self._save_or_restore(snapshot)
        logger.info("Seeded %s sample tasks", len(created))
        return created

    def _save_or_restore(self, snapshot: list[TaskEntity]) -> None:
        # a failed save must not leave unsaved changes in the store
        try:
            self.save()
        except Exception:
            logger.warning("Save failed, restoring %s tasks", len(snapshot))
            self._store.replace_all(snapshot)
            raise
