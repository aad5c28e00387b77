"""Pure reshaping of enrollment records into chart-ready buckets.

Every function here is deterministic and returns new objects; inputs
are never mutated. Grouping preserves first-seen key order, ranking is
a stable descending sort.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from app.features.enrollment.schemas import (
    AggregatedBucket,
    ComparisonRow,
    CourseLevelRecord,
    SourceCourseRecord,
    StaffCourseRecord,
)
from app.shared.labels import level_key, truncate_label


class JoinMode(str, Enum):
    """How the staff comparison treats courses missing from the primary side."""

    LEFT = "left"
    FULL = "full"


@dataclass(frozen=True)
class ShareOfWhole:
    """A bucket's share of its pie.

    Attributes:
        bucket: The bucket itself.
        fraction: value / total, 0.0 when the total is 0.
        percent: fraction as a rounded (half-up) integer percentage.
    """

    bucket: AggregatedBucket
    fraction: float
    percent: int


# =============================================================================
# Grouping
# =============================================================================


def group_and_sum[T](
    items: Iterable[T],
    key: Callable[[T], str],
    count: Callable[[T], int],
) -> list[AggregatedBucket]:
    """Sum counts per distinct key.

    Args:
        items: Leaf entries to aggregate.
        key: Extracts the grouping key of an entry.
        count: Extracts the (non-negative) count of an entry.

    Returns:
        One bucket per key, in first-seen order.
    """
    totals: dict[str, int] = {}
    for item in items:
        name = key(item)
        totals[name] = totals.get(name, 0) + count(item)
    return [AggregatedBucket(name=name, value=value) for name, value in totals.items()]


def level_totals(records: Iterable[CourseLevelRecord]) -> list[AggregatedBucket]:
    """Enrollments per level across all courses.

    Unspecified levels are grouped under ``UNKNOWN``; relabeling is left
    to the presentation and export code.
    """
    return group_and_sum(
        (level for record in records for level in record.levels),
        key=lambda level: level_key(level.level),
        count=lambda level: level.count,
    )


def course_level_totals(records: Iterable[CourseLevelRecord]) -> list[AggregatedBucket]:
    """Enrollments per course, summed over its levels."""
    return group_and_sum(
        records,
        key=lambda record: record.course,
        count=lambda record: record.total,
    )


def source_totals(records: Iterable[SourceCourseRecord]) -> list[AggregatedBucket]:
    """Enrollments per lead source (raw source tags)."""
    return group_and_sum(
        records,
        key=lambda record: record.source_name,
        count=lambda record: record.total,
    )


def type_totals(records: Iterable[StaffCourseRecord]) -> list[AggregatedBucket]:
    """Enrollments per course type; empty tags count as OTHER."""
    return group_and_sum(
        records,
        key=lambda record: record.type_key,
        count=lambda record: record.count,
    )


# =============================================================================
# Ranking and shares
# =============================================================================


def rank_and_truncate[T](
    items: Iterable[T],
    limit: int,
    count: Callable[[T], int],
) -> list[T]:
    """Top ``limit`` entries by count, zero counts excluded.

    The sort is stable: entries with equal counts keep their input order.

    Raises:
        ValueError: If limit is negative.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    non_zero = [item for item in items if count(item) > 0]
    return sorted(non_zero, key=count, reverse=True)[:limit]


def rank_buckets(buckets: Iterable[AggregatedBucket], limit: int) -> list[AggregatedBucket]:
    """rank_and_truncate specialised for buckets."""
    return rank_and_truncate(buckets, limit, count=lambda bucket: bucket.value)


def percent_of_whole(buckets: Sequence[AggregatedBucket]) -> list[ShareOfWhole]:
    """Each bucket's share of the sum of all buckets.

    An empty or all-zero pie reports 0% everywhere instead of dividing by zero.
    """
    total = sum(bucket.value for bucket in buckets)
    shares: list[ShareOfWhole] = []
    for bucket in buckets:
        if total == 0:
            shares.append(ShareOfWhole(bucket=bucket, fraction=0.0, percent=0))
            continue
        exact = Decimal(bucket.value) * 100 / Decimal(total)
        percent = int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        shares.append(ShareOfWhole(bucket=bucket, fraction=bucket.value / total, percent=percent))
    return shares


# =============================================================================
# Staff comparison
# =============================================================================


def join_staff_courses(
    telecaller: Sequence[StaffCourseRecord],
    counsellor: Sequence[StaffCourseRecord],
    *,
    mode: JoinMode = JoinMode.LEFT,
    drop_empty: bool = True,
    label_limit: int = 20,
) -> list[ComparisonRow]:
    """Join telecaller and counsellor records on course name.

    Args:
        telecaller: Primary records; every one of them yields a row.
        counsellor: Secondary records. The first record per course name wins.
        mode: LEFT drops courses only the counsellor side has; FULL appends
            them (in counsellor order) with a telecaller count of 0.
        drop_empty: Drop rows where both counts are 0.
        label_limit: Axis label truncation threshold.

    Returns:
        Comparison rows, primary order first.
    """
    mode = JoinMode(mode)
    lookup: dict[str, StaffCourseRecord] = {}
    for record in counsellor:
        lookup.setdefault(record.course_name, record)

    rows: list[ComparisonRow] = []
    for record in telecaller:
        match = lookup.get(record.course_name)
        rows.append(
            _comparison_row(
                record.course_name,
                telecaller=record.count,
                counsellor=match.count if match else 0,
                type_=record.type_key,
                label_limit=label_limit,
            )
        )

    if mode is JoinMode.FULL:
        seen = {record.course_name for record in telecaller}
        for name, record in lookup.items():
            if name in seen:
                continue
            rows.append(
                _comparison_row(
                    name,
                    telecaller=0,
                    counsellor=record.count,
                    type_=record.type_key,
                    label_limit=label_limit,
                )
            )

    if drop_empty:
        rows = [row for row in rows if row.telecaller > 0 or row.counsellor > 0]
    return rows


def _comparison_row(
    course_name: str,
    *,
    telecaller: int,
    counsellor: int,
    type_: str,
    label_limit: int,
) -> ComparisonRow:
    label = truncate_label(course_name, label_limit)
    return ComparisonRow(
        course=label.display,
        full_course_name=label.full,
        telecaller=telecaller,
        counsellor=counsellor,
        type=type_,
    )
