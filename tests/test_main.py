from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError

from tasklist import main as main_module
from tasklist.config import Settings
from tasklist.domain.clock import FixedClock
from tasklist.infra.db import create_db_engine, create_session_factory, init_db
from tasklist.infra.models import TaskModel
from tasklist.infra.store import TaskStore
from tasklist.services.task_service import TaskService


def make_service() -> TaskService:
    clock = FixedClock(datetime(2025, 6, 14, 12, 0))
    return TaskService(TaskStore(clock), clock=clock)


def test_render_lists_stats_and_labels() -> None:
    service = make_service()
    service.seed_sample_tasks()
    service.add_task("File taxes", "personal", "high", "2025-06-10")

    output = main_module.render(service).splitlines()

    assert output[0] == "Total: 4 • Completed: 1 • Pending: 3"
    assert output[1] == "[ ] #4 File taxes | Personal | High Priority | Due: Jun 10 (overdue)"
    assert output[2] == "[ ] #1 Complete project proposal | Work | High Priority | Due: Tomorrow"
    assert output[-1] == "[x] #3 Schedule doctor appointment | Health | Medium Priority"


def test_render_empty_view() -> None:
    service = make_service()
    service.set_filter(status="overdue")

    assert main_module.render(service).splitlines()[1] == "No tasks found."


def test_build_service_without_database_is_in_memory() -> None:
    service = main_module.build_service(Settings())

    service.add_task("Ephemeral")

    assert service.load() == 0


def test_build_service_loads_from_database(tmp_path: Path) -> None:
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'tasks.db'}")
    first = main_module.build_service(settings)
    first.add_task("Stored")

    second = main_module.build_service(settings)

    assert [t.title for t in second.list_tasks()] == ["Stored"]


def test_main_rejects_unknown_filter(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    settings = Settings(log_dir=str(tmp_path / "logs"))
    monkeypatch.setattr(main_module, "SETTINGS", settings)

    assert main_module.main(["someday"]) == 2


def test_main_prints_filtered_view(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    settings = Settings(log_dir=str(tmp_path / "logs"))
    monkeypatch.setattr(main_module, "SETTINGS", settings)

    assert main_module.main(["all", "shopping"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Total: 3 • Completed: 1 • Pending: 2"
    assert len(lines) == 2
    assert "Buy groceries for the week" in lines[1]


def test_build_service_shares_one_clock() -> None:
    clock = FixedClock(datetime(2025, 6, 14, 12, 0))
    service = main_module.build_service(Settings(), clock)

    task = service.add_task("Pack bags", due_date="2025-06-15")

    assert task.created_at == clock.now()
    assert service.format_due_date(task) == "Tomorrow"


def test_build_service_falls_back_on_unreadable_rows(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'tasks.db'}"
    engine = create_db_engine(url)
    init_db(engine)
    with create_session_factory(engine)() as session:
        session.add(
            TaskModel(
                id=1,
                title="Legacy row",
                category="work",
                priority="urgent",
                completed=False,
                created_at=datetime(2025, 6, 1),
            )
        )
        session.commit()

    service = main_module.build_service(Settings(database_url=url))

    assert service.list_tasks() == []
    assert service.load() == 0


def test_main_survives_failed_sample_save(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def failing_save(self: TaskService) -> None:
        raise OperationalError("INSERT INTO tasks", {}, Exception("disk I/O error"))

    monkeypatch.setattr(main_module, "SETTINGS", Settings(log_dir=str(tmp_path / "logs")))
    monkeypatch.setattr(TaskService, "save", failing_save)

    assert main_module.main([]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Total: 0 • Completed: 0 • Pending: 0", "No tasks found."]
