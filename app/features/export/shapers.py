"""Shapers: raw enrollment records to flat spreadsheet rows."""

from collections.abc import Sequence
from typing import Any

from app.features.enrollment.aggregation import JoinMode, join_staff_courses
from app.features.enrollment.schemas import (
    CourseLevelRecord,
    SourceCourseRecord,
    StaffCourseRecord,
)
from app.shared.labels import display_level, source_label

LEVEL_HEADERS = ["Course Name", "Level", "Count"]
SOURCE_HEADERS = ["Source Name", "Course Name", "Count"]
STAFF_HEADERS = [
    "Course Name",
    "Course Type",
    "Telecaller Enrollments",
    "Counsellor Enrollments",
    "Total Enrollments",
]


def shape_levels(records: Sequence[CourseLevelRecord]) -> list[dict[str, Any]]:
    """One row per (course, level); unspecified levels read 'Unspecified'."""
    return [
        {
            "Course Name": record.course,
            "Level": display_level(level.level),
            "Count": level.count,
        }
        for record in records
        for level in record.levels
    ]


def shape_sources(records: Sequence[SourceCourseRecord]) -> list[dict[str, Any]]:
    """One row per (source, course); underscores in source names become spaces."""
    return [
        {
            "Source Name": source_label(record.source_name),
            "Course Name": course.course_name,
            "Count": course.count,
        }
        for record in records
        for course in record.courses
    ]


def shape_staff_performance(
    telecaller: Sequence[StaffCourseRecord],
    counsellor: Sequence[StaffCourseRecord],
    mode: JoinMode = JoinMode.FULL,
) -> list[dict[str, Any]]:
    """Telecaller vs counsellor enrollments per course, with a total column.

    Unlike the on-screen comparison this defaults to the union of course
    names, so counsellor-only courses are not lost from the report. Rows
    with zero enrollments on both sides are kept.
    """
    rows = join_staff_courses(
        telecaller,
        counsellor,
        mode=mode,
        drop_empty=False,
    )
    return [
        {
            "Course Name": row.full_course_name,
            "Course Type": row.type,
            "Telecaller Enrollments": row.telecaller,
            "Counsellor Enrollments": row.counsellor,
            "Total Enrollments": row.total,
        }
        for row in rows
    ]
