"""Tests for chart colour assignment."""

import pytest

from app.features.enrollment.palette import (
    CHART_COLORS,
    TYPE_COLORS,
    positional_color,
    type_color,
)
from app.features.enrollment.schemas import CourseType


def test_positional_color_cycles() -> None:
    """Positions wrap around the palette."""
    assert positional_color(0) == CHART_COLORS[0]
    assert positional_color(len(CHART_COLORS) + 1) == CHART_COLORS[1]


def test_known_types_use_fixed_colors() -> None:
    """Known types ignore their position."""
    assert type_color("BACHELORS", 5) == CHART_COLORS[0]
    assert type_color("MASTERS", 0) == CHART_COLORS[1]
    assert type_color("ALEVEL", 0) == CHART_COLORS[2]
    assert type_color("ACCA", 0) == CHART_COLORS[3]


@pytest.mark.parametrize("raw", ["OTHER", "FOUNDATION", "", None])
def test_unknown_types_fall_back_to_position(raw: str | None) -> None:
    """OTHER and unrecognised types take the positional colour."""
    assert type_color(raw, 9) == CHART_COLORS[9 % len(CHART_COLORS)]


def test_type_colors_read_only() -> None:
    """The shared type mapping cannot be mutated."""
    with pytest.raises(TypeError):
        TYPE_COLORS[CourseType.OTHER] = "#000000"  # type: ignore[index]
