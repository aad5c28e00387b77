"""Sortable table views for the levels and sources tables."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from app.core.exceptions import BadRequestError
from app.features.enrollment.schemas import (
    Badge,
    CourseLevelRecord,
    SourceCourseRecord,
    TableColumn,
    TableName,
    TableResponse,
)
from app.shared.labels import UNSPECIFIED_LABEL, display_level, source_label

CellRenderer = Callable[[Any, Mapping[str, Any]], Any]
"""``render(value, row) -> displayable`` override for a column."""


@dataclass(frozen=True)
class ColumnSpec:
    """Column descriptor with an optional render override."""

    key: str
    label: str
    sortable: bool = True
    render: CellRenderer | None = None

    def describe(self) -> TableColumn:
        return TableColumn(key=self.key, label=self.label, sortable=self.sortable)


@dataclass(frozen=True)
class TableView:
    """Raw table rows plus the columns used to sort and render them."""

    name: TableName
    columns: tuple[ColumnSpec, ...]
    rows: list[dict[str, Any]] = field(default_factory=lambda: [])
    sort_key: str | None = None
    descending: bool = False

    def column(self, key: str) -> ColumnSpec:
        for column in self.columns:
            if column.key == key:
                return column
        raise BadRequestError(
            f"Unknown column '{key}' for table '{self.name.value}'",
            details={"available": [c.key for c in self.columns]},
        )

    def sorted_by(self, key: str, descending: bool = False) -> TableView:
        """Return a copy sorted on a sortable column.

        The sort is stable; empty cells always go last.

        Raises:
            BadRequestError: If the column is unknown or not sortable.
        """
        column = self.column(key)
        if not column.sortable:
            raise BadRequestError(f"Column '{key}' of table '{self.name.value}' is not sortable")

        present = [row for row in self.rows if row.get(key) is not None]
        missing = [row for row in self.rows if row.get(key) is None]
        present.sort(key=lambda row: _sort_value(row[key]), reverse=descending)
        return TableView(
            name=self.name,
            columns=self.columns,
            rows=present + missing,
            sort_key=key,
            descending=descending,
        )

    def render(self) -> TableResponse:
        """Apply render overrides and describe the columns."""
        rendered: list[dict[str, Any]] = []
        for row in self.rows:
            cells = dict(row)
            for column in self.columns:
                if column.render is not None and column.key in row:
                    cells[column.key] = _displayable(column.render(row[column.key], row))
            rendered.append(cells)
        return TableResponse(
            name=self.name,
            columns=[column.describe() for column in self.columns],
            rows=rendered,
            sort_key=self.sort_key,
            descending=self.descending,
        )


def _sort_value(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


def _displayable(value: Any) -> Any:
    return value.model_dump() if isinstance(value, BaseModel) else value


# =============================================================================
# Renderers
# =============================================================================


def level_badge(value: str, _row: Mapping[str, Any]) -> Badge:
    return Badge(text=value, variant="secondary" if value == UNSPECIFIED_LABEL else "default")


def source_badge(value: str, _row: Mapping[str, Any]) -> Badge:
    return Badge(text=value, variant="outline")


LEVEL_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec(key="course", label="Course Name"),
    ColumnSpec(key="level", label="Level", render=level_badge),
    ColumnSpec(key="count", label="Enrollments"),
)

SOURCE_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec(key="source", label="Source", render=source_badge),
    ColumnSpec(key="course", label="Course Name"),
    ColumnSpec(key="count", label="Enrollments"),
)


# =============================================================================
# Builders
# =============================================================================


def levels_table(records: Sequence[CourseLevelRecord]) -> TableView:
    """One row per (course, level) pair."""
    rows = [
        {
            "id": f"{course_index}-{level_index}",
            "course": record.course,
            "level": display_level(level.level),
            "count": level.count,
            "course_full": record.course,
        }
        for course_index, record in enumerate(records)
        for level_index, level in enumerate(record.levels)
    ]
    return TableView(name=TableName.LEVELS, columns=LEVEL_COLUMNS, rows=rows)


def sources_table(records: Sequence[SourceCourseRecord]) -> TableView:
    """One row per (source, course) pair."""
    rows = [
        {
            "id": f"{source_index}-{course_index}",
            "source": source_label(record.source_name),
            "course": course.course_name,
            "count": course.count,
            "source_full": record.source_name,
        }
        for source_index, record in enumerate(records)
        for course_index, course in enumerate(record.courses)
    ]
    return TableView(name=TableName.SOURCES, columns=SOURCE_COLUMNS, rows=rows)
