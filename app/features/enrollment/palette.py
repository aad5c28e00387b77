"""Chart colours.

Read-only: the positional palette is a tuple and the type mapping a
mapping proxy, so callers share them without being able to mutate them.
"""

from collections.abc import Mapping
from types import MappingProxyType

from app.features.enrollment.schemas import CourseType

CHART_COLORS: tuple[str, ...] = (
    "#2563eb",
    "#16a34a",
    "#f59e0b",
    "#dc2626",
    "#7c3aed",
    "#0891b2",
    "#db2777",
    "#65a30d",
)

TYPE_COLORS: Mapping[CourseType, str] = MappingProxyType(
    {
        CourseType.BACHELORS: CHART_COLORS[0],
        CourseType.MASTERS: CHART_COLORS[1],
        CourseType.ALEVEL: CHART_COLORS[2],
        CourseType.ACCA: CHART_COLORS[3],
    }
)


def positional_color(index: int, palette: tuple[str, ...] = CHART_COLORS) -> str:
    """Colour for the bucket at ``index``, cycling through the palette."""
    return palette[index % len(palette)]


def type_color(
    raw_type: str | None,
    index: int,
    palette: tuple[str, ...] = CHART_COLORS,
    type_colors: Mapping[CourseType, str] = TYPE_COLORS,
) -> str:
    """Colour for a course type, falling back to the positional palette.

    OTHER and unrecognised tags have no fixed colour.
    """
    course_type = CourseType.parse(raw_type)
    return type_colors.get(course_type) or positional_color(index, palette)
