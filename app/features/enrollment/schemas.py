"""Pydantic schemas for enrollment statistics and dashboard views.

Input models mirror the enrollment API envelopes (camelCase keys accepted);
output models are the chart- and table-ready views returned to the
presentation layer.
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.shared.labels import parse_level

# =============================================================================
# Enums
# =============================================================================


class CourseType(str, Enum):
    """Known course types. Anything else is grouped as OTHER."""

    BACHELORS = "BACHELORS"
    MASTERS = "MASTERS"
    ALEVEL = "ALEVEL"
    ACCA = "ACCA"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, raw: str | None) -> "CourseType":
        """Map a raw type tag onto a known type, defaulting to OTHER."""
        try:
            return cls((raw or "").strip().upper())
        except ValueError:
            return cls.OTHER


class StaffRole(str, Enum):
    """Staff roles whose enrollments are compared."""

    TELECALLER = "telecaller"
    COUNSELLOR = "counsellor"


class TableName(str, Enum):
    """Sortable tables offered by the dashboard."""

    LEVELS = "levels"
    SOURCES = "sources"


# =============================================================================
# Input Records
# =============================================================================


class LevelCount(BaseModel):
    """Enrollment count for one level of a course.

    ``level`` is None when the source reported the ``UNKNOWN`` sentinel.
    """

    model_config = ConfigDict(frozen=True)

    level: str | None = Field(
        None,
        description="Level tag (e.g. l3, l4). Null means unspecified.",
    )
    count: int = Field(..., ge=0, strict=True, description="Number of enrollments.")

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str | None) -> str | None:
        """Turn the UNKNOWN sentinel into an explicit None."""
        return parse_level(v)

    @property
    def is_unspecified(self) -> bool:
        return self.level is None


class CourseLevelRecord(BaseModel):
    """Enrollment counts of one course, split by level."""

    model_config = ConfigDict(frozen=True)

    course: str = Field(..., description="Course name.")
    levels: list[LevelCount] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(level.count for level in self.levels)


class SourceCourse(BaseModel):
    """Enrollment count of one course within a lead source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    course_name: str = Field(
        ...,
        validation_alias=AliasChoices("courseName", "course_name"),
        description="Course name.",
    )
    count: int = Field(..., ge=0, strict=True, description="Number of enrollments.")


class SourceCourseRecord(BaseModel):
    """Enrollment counts of one lead source, split by course."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_name: str = Field(
        ...,
        validation_alias=AliasChoices("sourceName", "source_name"),
        description="Upper-snake-case source tag (e.g. WALKIN, SOCIAL_MEDIA).",
    )
    courses: list[SourceCourse] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(course.count for course in self.courses)


class StaffCourseRecord(BaseModel):
    """Enrollments attributed to one staff role for a course."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    course_name: str = Field(
        ...,
        validation_alias=AliasChoices("courseName", "course_name"),
        description="Course name, used as the join key between roles.",
    )
    count: int = Field(..., ge=0, strict=True, description="Number of enrollments.")
    type: str = Field(
        CourseType.OTHER.value,
        description="Course type tag. Unknown or empty values group as OTHER.",
    )

    @property
    def course_type(self) -> CourseType:
        return CourseType.parse(self.type)

    @property
    def type_key(self) -> str:
        """Grouping key: the raw tag, or OTHER when empty."""
        return self.type.strip() or CourseType.OTHER.value


# =============================================================================
# Input Envelopes
# =============================================================================


class EnrollmentLevelsPayload(BaseModel):
    """``{"data": [...]}`` envelope for course level counts."""

    data: list[CourseLevelRecord] = Field(default_factory=list)


class EnrollmentSourcesPayload(BaseModel):
    """``{"data": [...]}`` envelope for lead source counts."""

    data: list[SourceCourseRecord] = Field(default_factory=list)


class StaffPerformancePayload(BaseModel):
    """Staff performance envelope as returned by the enrollment API."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int | None = Field(
        None,
        validation_alias=AliasChoices("statusCode", "status_code"),
    )
    message: str | None = None
    data: list[StaffCourseRecord] = Field(default_factory=list)


class StaffRequest(BaseModel):
    """Telecaller and counsellor datasets to compare."""

    telecaller: StaffPerformancePayload
    counsellor: StaffPerformancePayload


class DashboardRequest(BaseModel):
    """All datasets rendered by the dashboard."""

    levels: EnrollmentLevelsPayload
    sources: EnrollmentSourcesPayload
    telecaller: StaffPerformancePayload
    counsellor: StaffPerformancePayload


# =============================================================================
# Aggregates
# =============================================================================


class AggregatedBucket(BaseModel):
    """A named total produced by grouping and summing counts."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Group key (or its display label).")
    value: int = Field(..., ge=0, description="Sum of counts for the key.")


class PieSlice(BaseModel):
    """Bucket decorated for a pie chart."""

    name: str
    value: int = Field(..., ge=0)
    percent: int = Field(
        ...,
        ge=0,
        le=100,
        description="Share of the pie as a rounded integer percentage. 0 when the pie is empty.",
    )
    label: str = Field(..., description="Slice label, e.g. 'MBA 25%'.")
    color: str


class ComparisonRow(BaseModel):
    """Telecaller vs counsellor enrollments for one course."""

    model_config = ConfigDict(frozen=True)

    course: str = Field(..., description="Axis label, truncated for display.")
    full_course_name: str = Field(..., description="Untruncated course name for tooltips.")
    telecaller: int = Field(..., ge=0)
    counsellor: int = Field(..., ge=0)
    type: str

    @property
    def total(self) -> int:
        return self.telecaller + self.counsellor


class LevelCourseBar(BaseModel):
    """Per-course bar with a per-level breakdown."""

    course: str
    full_course_name: str
    total_enrollments: int = Field(..., ge=0)
    levels: dict[str, int] = Field(
        default_factory=dict,
        description="Enrollments keyed by display level label.",
    )


class SourceCourseBar(BaseModel):
    """One (source, course) pair for the course performance chart."""

    source: str
    course: str
    full_course_name: str
    count: int = Field(..., ge=0)


class RankedCourse(BaseModel):
    """Entry of a staff role's top course list."""

    course_name: str
    count: int = Field(..., ge=0)
    type: str
    color: str


# =============================================================================
# Tables
# =============================================================================


class Badge(BaseModel):
    """Rendered badge cell."""

    text: str
    variant: str = "default"


class TableColumn(BaseModel):
    """Column descriptor handed to table components."""

    key: str
    label: str
    sortable: bool = True


class TableResponse(BaseModel):
    """Ordered, rendered table rows plus their column descriptors."""

    name: TableName
    columns: list[TableColumn]
    rows: list[dict[str, Any]]
    sort_key: str | None = None
    descending: bool = False


# =============================================================================
# Views
# =============================================================================


class LevelsView(BaseModel):
    """Enrollment distribution by level."""

    distribution: list[PieSlice]
    course_breakdown: list[LevelCourseBar]
    table: TableResponse


class SourcesView(BaseModel):
    """Enrollment sources analysis."""

    distribution: list[PieSlice]
    top_sources: list[AggregatedBucket]
    course_performance: list[SourceCourseBar]
    table: TableResponse


class StaffRolePanel(BaseModel):
    """Results of one staff role."""

    role: StaffRole
    type_distribution: list[PieSlice]
    top_courses: list[RankedCourse]


class StaffView(BaseModel):
    """Staff performance analysis."""

    comparison: list[ComparisonRow]
    telecaller: StaffRolePanel
    counsellor: StaffRolePanel


class DashboardStats(BaseModel):
    """Headline numbers shown above the charts."""

    total_enrollments: int = Field(..., ge=0)
    total_courses: int = Field(..., ge=0)
    total_sources: int = Field(..., ge=0)


class DashboardResponse(BaseModel):
    """Every dashboard view computed from one request."""

    stats: DashboardStats
    levels: LevelsView
    sources: SourcesView
    staff: StaffView
