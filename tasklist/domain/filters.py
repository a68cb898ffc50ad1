from __future__ import annotations

from dataclasses import dataclass

from .enums import ALL_CATEGORIES, StatusFilter
from .errors import ValidationError


@dataclass(frozen=True)
class TaskFilters:
    status: StatusFilter = StatusFilter.ALL
    category: str = ALL_CATEGORIES


def parse_status_filter(value: StatusFilter | str) -> StatusFilter:
    try:
        return StatusFilter(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError(f"unknown status filter: {value!r}") from exc
