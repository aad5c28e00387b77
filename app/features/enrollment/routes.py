"""API routes for the enrollment dashboard.

Each endpoint takes already-fetched enrollment JSON in the request body
and returns chart- and table-ready views.
"""

from fastapi import APIRouter, Query

from app.core.logging import get_logger
from app.features.enrollment.schemas import (
    DashboardRequest,
    DashboardResponse,
    EnrollmentLevelsPayload,
    EnrollmentSourcesPayload,
    LevelsView,
    SourcesView,
    StaffRequest,
    StaffView,
    TableResponse,
)
from app.features.enrollment.service import DashboardService

logger = get_logger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.post(
    "",
    response_model=DashboardResponse,
    summary="Build every dashboard view",
    description="""
Compute headline stats, the levels and sources charts, staff comparison
and both tables from one request.

**Body**: `levels` and `sources` use the `{"data": [...]}` envelope;
`telecaller` and `counsellor` use the staff performance envelope
(`statusCode`, `message`, `data`).
""",
)
async def build_dashboard(request: DashboardRequest) -> DashboardResponse:
    """Build the full dashboard."""
    return DashboardService().build_dashboard(request)


@router.post("/levels", response_model=LevelsView, summary="Enrollment distribution by levels")
async def build_levels(payload: EnrollmentLevelsPayload) -> LevelsView:
    """Level pie (UNKNOWN shown as Unspecified), top 10 course bars and table."""
    return DashboardService().build_levels_view(payload)


@router.post("/sources", response_model=SourcesView, summary="Enrollment sources analysis")
async def build_sources(payload: EnrollmentSourcesPayload) -> SourcesView:
    """Source pie, top 8 sources and top 15 course-by-source bars."""
    return DashboardService().build_sources_view(payload)


@router.post("/staff", response_model=StaffView, summary="Staff performance analysis")
async def build_staff(request: StaffRequest) -> StaffView:
    """Telecaller vs counsellor comparison and per-role panels."""
    return DashboardService().build_staff_view(request.telecaller, request.counsellor)


@router.post("/tables/levels", response_model=TableResponse, summary="Enrollment by levels table")
async def levels_table(
    payload: EnrollmentLevelsPayload,
    sort_key: str | None = Query(None, description="Column key to sort on."),
    descending: bool = Query(False, description="Sort descending."),
) -> TableResponse:
    """Levels table, optionally sorted."""
    return DashboardService().build_table(payload, sort_key, descending)


@router.post(
    "/tables/sources", response_model=TableResponse, summary="Enrollment by sources table"
)
async def sources_table(
    payload: EnrollmentSourcesPayload,
    sort_key: str | None = Query(None, description="Column key to sort on."),
    descending: bool = Query(False, description="Sort descending."),
) -> TableResponse:
    """Sources table, optionally sorted."""
    return DashboardService().build_table(payload, sort_key, descending)
