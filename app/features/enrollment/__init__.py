"""Enrollment dashboard: aggregation of level, source and staff statistics.

Provides the pure aggregation functions, colour assignment, sortable
tables and the service/routes that assemble them into dashboard views.
"""

from app.features.enrollment.aggregation import (
    JoinMode,
    ShareOfWhole,
    group_and_sum,
    join_staff_courses,
    level_totals,
    percent_of_whole,
    rank_and_truncate,
    source_totals,
    type_totals,
)
from app.features.enrollment.routes import router
from app.features.enrollment.schemas import (
    AggregatedBucket,
    ComparisonRow,
    CourseLevelRecord,
    CourseType,
    DashboardRequest,
    DashboardResponse,
    EnrollmentLevelsPayload,
    EnrollmentSourcesPayload,
    SourceCourseRecord,
    StaffCourseRecord,
    StaffPerformancePayload,
)
from app.features.enrollment.service import DashboardService

__all__ = [
    "AggregatedBucket",
    "ComparisonRow",
    "CourseLevelRecord",
    "CourseType",
    "DashboardRequest",
    "DashboardResponse",
    "DashboardService",
    "EnrollmentLevelsPayload",
    "EnrollmentSourcesPayload",
    "JoinMode",
    "ShareOfWhole",
    "SourceCourseRecord",
    "StaffCourseRecord",
    "StaffPerformancePayload",
    "group_and_sum",
    "join_staff_courses",
    "level_totals",
    "percent_of_whole",
    "rank_and_truncate",
    "router",
    "source_totals",
    "type_totals",
]
