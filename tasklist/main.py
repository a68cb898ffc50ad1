from __future__ import annotations

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from tasklist.config import SETTINGS, Settings
from tasklist.domain.clock import Clock, SystemClock
from tasklist.domain.entities import TaskEntity
from tasklist.domain.errors import TaskError
from tasklist.infra.db import create_db_engine, create_session_factory, init_db
from tasklist.infra.logging import setup_logging
from tasklist.infra.repository import TaskRepository
from tasklist.infra.store import TaskStore
from tasklist.services.task_service import TaskService

logger = logging.getLogger(__name__)


def build_service(settings: Settings, clock: Clock | None = None) -> TaskService:
    clock = clock or SystemClock()
    store = TaskStore(clock)
    if not settings.database_url:
        return TaskService(store, clock=clock)

    try:
        engine = create_db_engine(settings.database_url)
        init_db(engine)
        service = TaskService(store, TaskRepository(create_session_factory(engine)), clock)
        service.load()
    except (SQLAlchemyError, TaskError):
        logger.warning("Database unavailable, tasks will not persist between sessions", exc_info=True)
        return TaskService(TaskStore(clock), clock=clock)
    return service


def render_task(service: TaskService, task: TaskEntity) -> str:
    mark = "x" if task.completed else " "
    parts = [
        f"[{mark}] #{task.id} {task.title}",
        task.category.capitalize(),
        f"{task.priority.value.capitalize()} Priority",
    ]
    due_label = service.format_due_date(task)
    if due_label:
        suffix = " (overdue)" if service.is_overdue(task) else ""
        parts.append(f"Due: {due_label}{suffix}")
    return " | ".join(parts)


def render(service: TaskService) -> str:
    stats = service.compute_stats()
    lines = [
        f"Total: {stats['total']} • Completed: {stats['completed']} • Pending: {stats['pending']}",
    ]
    view = service.compute_view()
    if not view:
        lines.append("No tasks found.")
    lines.extend(render_task(service, task) for task in view)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    setup_logging(SETTINGS)

    service = build_service(SETTINGS)
    if SETTINGS.seed_sample_tasks:
        try:
            service.seed_sample_tasks()
        except SQLAlchemyError:
            logger.warning("Could not save sample tasks, starting empty", exc_info=True)

    try:
        service.set_filter(
            status=args[0] if len(args) > 0 else None,
            category=args[1] if len(args) > 1 else None,
        )
    except TaskError as exc:
        logger.error("%s", exc)
        return 2

    print(render(service))
    return 0


if __name__ == "__main__":
    sys.exit(main())
