from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

from tasklist.domain.due_dates import format_due_date, is_overdue
from tasklist.domain.entities import TaskEntity
from tasklist.domain.enums import Priority

NOW = datetime(2025, 6, 20, 18, 30)


def make_task(due_date: date | None, completed: bool = False) -> TaskEntity:
    return TaskEntity(
        id=1,
        title="Pay rent",
        category="personal",
        priority=Priority.HIGH,
        due_date=due_date,
        completed=completed,
        created_at=datetime(2025, 6, 1),
        completed_at=NOW if completed else None,
    )


def test_past_due_incomplete_task_is_overdue() -> None:
    task = make_task(date(2025, 6, 15))

    assert is_overdue(task, NOW) is True
    assert is_overdue(replace(task, completed=True, completed_at=NOW), NOW) is False


def test_due_today_or_later_is_not_overdue() -> None:
    assert is_overdue(make_task(date(2025, 6, 20)), NOW) is False
    assert is_overdue(make_task(date(2025, 6, 21)), NOW) is False


def test_task_without_due_date_is_never_overdue() -> None:
    assert is_overdue(make_task(None), NOW) is False


def test_today_and_tomorrow_labels() -> None:
    assert format_due_date(date(2025, 6, 20), NOW) == "Today"
    assert format_due_date(date(2025, 6, 21), NOW) == "Tomorrow"


def test_tomorrow_across_year_boundary() -> None:
    assert format_due_date(date(2026, 1, 1), datetime(2025, 12, 31, 23, 59)) == "Tomorrow"


def test_short_labels() -> None:
    assert format_due_date(date(2025, 6, 5), NOW) == "Jun 5"
    assert format_due_date(date(2025, 6, 19), NOW) == "Jun 19"
    assert format_due_date(date(2026, 1, 12), NOW) == "Jan 12, 2026"
    assert format_due_date(date(2024, 12, 3), NOW) == "Dec 3, 2024"


def test_absent_due_date_has_no_label() -> None:
    assert format_due_date(None, NOW) is None


def test_accepts_plain_date_as_now() -> None:
    assert format_due_date(date(2025, 6, 20), date(2025, 6, 20)) == "Today"
