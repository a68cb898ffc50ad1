from __future__ import annotations


class TaskError(Exception):
    """Base class for recoverable task-list errors."""


class ValidationError(TaskError, ValueError):
    pass


class NotFoundError(TaskError, LookupError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id
