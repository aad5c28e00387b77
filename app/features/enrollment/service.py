"""Service layer for the enrollment dashboard.

Turns validated enrollment payloads into the pie, bar and table views
rendered by the front end. Nothing is cached between calls.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.config import Settings, get_settings
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.features.enrollment.aggregation import (
    JoinMode,
    course_level_totals,
    join_staff_courses,
    level_totals,
    percent_of_whole,
    rank_and_truncate,
    rank_buckets,
    source_totals,
    type_totals,
)
from app.features.enrollment.palette import positional_color, type_color
from app.features.enrollment.schemas import (
    AggregatedBucket,
    CourseLevelRecord,
    DashboardRequest,
    DashboardResponse,
    DashboardStats,
    EnrollmentLevelsPayload,
    EnrollmentSourcesPayload,
    LevelCourseBar,
    LevelsView,
    PieSlice,
    RankedCourse,
    SourceCourseBar,
    SourcesView,
    StaffCourseRecord,
    StaffPerformancePayload,
    StaffRole,
    StaffRolePanel,
    StaffView,
    TableResponse,
)
from app.features.enrollment.tables import TableView, levels_table, sources_table
from app.shared.labels import display_level, humanize_source, source_label, truncate_label

logger = get_logger(__name__)


def parse_payload[M: BaseModel](model: type[M], raw: Mapping[str, Any], label: str) -> M:
    """Validate raw API JSON, failing fast on malformed input.

    Args:
        model: Envelope model to validate against.
        raw: Decoded JSON object.
        label: Dataset name used in the error message.

    Returns:
        Validated envelope.

    Raises:
        ValidationError: If fields are missing or counts are not non-negative integers.
    """
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        logger.warning("dashboard.payload_rejected", dataset=label, error_count=e.error_count())
        raise ValidationError.from_pydantic(label, e) from e


def pie_slices(
    buckets: Sequence[AggregatedBucket],
    colors: Sequence[str] | None = None,
) -> list[PieSlice]:
    """Decorate buckets with percent labels and colours.

    Args:
        buckets: Buckets already carrying their display names.
        colors: Colour per bucket; positional palette when omitted.

    Returns:
        One slice per bucket, in bucket order.
    """
    slices: list[PieSlice] = []
    for index, share in enumerate(percent_of_whole(buckets)):
        name = share.bucket.name
        slices.append(
            PieSlice(
                name=name,
                value=share.bucket.value,
                percent=share.percent,
                label=f"{name} {share.percent}%",
                color=colors[index] if colors is not None else positional_color(index),
            )
        )
    return slices


class DashboardService:
    """Builds the dashboard views.

    Limits and label thresholds come from Settings so deployments can tune
    them without code changes.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize dashboard service.

        Args:
            settings: Settings override (defaults to the cached singleton).
        """
        self.settings = settings or get_settings()

    # -------------------------------------------------------------------------
    # Levels
    # -------------------------------------------------------------------------

    def build_levels_view(self, payload: EnrollmentLevelsPayload) -> LevelsView:
        """Level distribution pie, top course bars and the levels table."""
        records = payload.data
        distribution = pie_slices(
            [
                AggregatedBucket(name=display_level(bucket.name), value=bucket.value)
                for bucket in level_totals(records)
            ]
        )

        bars = [self._level_course_bar(record) for record in records]
        course_breakdown = rank_and_truncate(
            bars,
            self.settings.top_level_courses,
            count=lambda bar: bar.total_enrollments,
        )

        logger.info(
            "dashboard.levels_built",
            course_count=len(records),
            level_count=len(distribution),
            total_enrollments=sum(s.value for s in distribution),
        )

        return LevelsView(
            distribution=distribution,
            course_breakdown=course_breakdown,
            table=levels_table(records).render(),
        )

    def _level_course_bar(self, record: CourseLevelRecord) -> LevelCourseBar:
        label = truncate_label(record.course, self.settings.label_max_length)
        breakdown: dict[str, int] = {}
        for level in record.levels:
            name = display_level(level.level)
            breakdown[name] = breakdown.get(name, 0) + level.count
        return LevelCourseBar(
            course=label.display,
            full_course_name=label.full,
            total_enrollments=record.total,
            levels=breakdown,
        )

    # -------------------------------------------------------------------------
    # Sources
    # -------------------------------------------------------------------------

    def build_sources_view(self, payload: EnrollmentSourcesPayload) -> SourcesView:
        """Source distribution, top sources and course-by-source bars."""
        records = payload.data
        ranked = sorted(
            (
                AggregatedBucket(name=humanize_source(bucket.name), value=bucket.value)
                for bucket in source_totals(records)
            ),
            key=lambda bucket: bucket.value,
            reverse=True,
        )

        course_bars: list[SourceCourseBar] = []
        for record in records:
            for course in record.courses:
                label = truncate_label(course.course_name, self.settings.course_label_max_length)
                course_bars.append(
                    SourceCourseBar(
                        source=source_label(record.source_name),
                        course=label.display,
                        full_course_name=label.full,
                        count=course.count,
                    )
                )

        logger.info(
            "dashboard.sources_built",
            source_count=len(records),
            course_pairs=len(course_bars),
        )

        return SourcesView(
            distribution=pie_slices(ranked),
            top_sources=rank_buckets(ranked, self.settings.top_sources),
            course_performance=rank_and_truncate(
                course_bars,
                self.settings.top_source_courses,
                count=lambda bar: bar.count,
            ),
            table=sources_table(records).render(),
        )

    # -------------------------------------------------------------------------
    # Staff
    # -------------------------------------------------------------------------

    def build_staff_view(
        self,
        telecaller: StaffPerformancePayload,
        counsellor: StaffPerformancePayload,
    ) -> StaffView:
        """Telecaller vs counsellor comparison plus one panel per role.

        The on-screen comparison is a left join: courses only the
        counsellors enrolled into are not shown here (the export includes them).
        """
        comparison = join_staff_courses(
            telecaller.data,
            counsellor.data,
            mode=JoinMode.LEFT,
            drop_empty=True,
            label_limit=self.settings.label_max_length,
        )

        logger.info(
            "dashboard.staff_built",
            telecaller_courses=len(telecaller.data),
            counsellor_courses=len(counsellor.data),
            comparison_rows=len(comparison),
        )

        return StaffView(
            comparison=comparison,
            telecaller=self.build_role_panel(StaffRole.TELECALLER, telecaller.data),
            counsellor=self.build_role_panel(StaffRole.COUNSELLOR, counsellor.data),
        )

    def build_role_panel(
        self,
        role: StaffRole,
        records: Sequence[StaffCourseRecord],
    ) -> StaffRolePanel:
        """Course type pie and top courses for one staff role."""
        buckets = type_totals(records)
        colors = [type_color(bucket.name, index) for index, bucket in enumerate(buckets)]
        top = rank_and_truncate(
            records,
            self.settings.top_staff_courses,
            count=lambda record: record.count,
        )
        return StaffRolePanel(
            role=role,
            type_distribution=pie_slices(buckets, colors=colors),
            top_courses=[
                RankedCourse(
                    course_name=record.course_name,
                    count=record.count,
                    type=record.type_key,
                    color=positional_color(index),
                )
                for index, record in enumerate(top)
            ],
        )

    # -------------------------------------------------------------------------
    # Tables and summary
    # -------------------------------------------------------------------------

    def build_table(
        self,
        payload: EnrollmentLevelsPayload | EnrollmentSourcesPayload,
        sort_key: str | None = None,
        descending: bool = False,
    ) -> TableResponse:
        """Render the levels or sources table, optionally sorted on one column.

        The payload type selects the table.
        """
        view: TableView
        if isinstance(payload, EnrollmentLevelsPayload):
            view = levels_table(payload.data)
        else:
            view = sources_table(payload.data)
        if sort_key is not None:
            view = view.sorted_by(sort_key, descending=descending)
        return view.render()

    def compute_stats(
        self,
        levels: EnrollmentLevelsPayload,
        sources: EnrollmentSourcesPayload,
    ) -> DashboardStats:
        """Headline totals: enrollments, courses and lead sources."""
        return DashboardStats(
            total_enrollments=sum(bucket.value for bucket in course_level_totals(levels.data)),
            total_courses=len(levels.data),
            total_sources=len(sources.data),
        )

    def build_dashboard(self, request: DashboardRequest) -> DashboardResponse:
        """Every view from a single request."""
        return DashboardResponse(
            stats=self.compute_stats(request.levels, request.sources),
            levels=self.build_levels_view(request.levels),
            sources=self.build_sources_view(request.sources),
            staff=self.build_staff_view(request.telecaller, request.counsellor),
        )
