from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import sessionmaker

from tasklist.domain.entities import TaskEntity
from tasklist.domain.enums import Priority
from tasklist.domain.errors import ValidationError

from .models import TaskModel

logger = logging.getLogger(__name__)


def _to_entity(model: TaskModel) -> TaskEntity:
    try:
        priority = Priority(model.priority)
    except ValueError as exc:
        raise ValidationError(f"task {model.id} has unknown priority {model.priority!r}") from exc
    return TaskEntity(
        id=model.id,
        title=model.title,
        category=model.category,
        priority=priority,
        due_date=model.due_date,
        completed=bool(model.completed),
        created_at=model.created_at,
        completed_at=model.completed_at,
    )


def _to_model(task: TaskEntity) -> TaskModel:
    return TaskModel(
        id=task.id,
        title=task.title,
        category=task.category,
        priority=task.priority.value,
        due_date=task.due_date,
        completed=task.completed,
        created_at=task.created_at,
        completed_at=task.completed_at,
    )


class TaskRepository:
    """Persistence hooks for the task store, backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def load(self) -> list[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel).order_by(TaskModel.id.asc())
            tasks = [_to_entity(task) for task in session.scalars(stmt)]
        logger.debug("Loaded %s tasks", len(tasks))
        return tasks

    def save(self, tasks: Sequence[TaskEntity]) -> None:
        with self._session_factory() as session:
            session.execute(delete(TaskModel))
            session.add_all([_to_model(task) for task in tasks])
            session.commit()
        logger.debug("Saved %s tasks", len(tasks))
