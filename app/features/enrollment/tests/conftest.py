"""Test fixtures for the enrollment dashboard.

Raw API JSON fixtures (levels_json, sources_json, ...) live in the
root conftest so the export tests can share them.
"""

from typing import Any

import pytest

from app.core.config import Settings
from app.features.enrollment.schemas import (
    DashboardRequest,
    EnrollmentLevelsPayload,
    EnrollmentSourcesPayload,
    StaffPerformancePayload,
)
from app.features.enrollment.service import DashboardService


@pytest.fixture
def levels_payload(levels_json: dict[str, Any]) -> EnrollmentLevelsPayload:
    return EnrollmentLevelsPayload.model_validate(levels_json)


@pytest.fixture
def sources_payload(sources_json: dict[str, Any]) -> EnrollmentSourcesPayload:
    return EnrollmentSourcesPayload.model_validate(sources_json)


@pytest.fixture
def telecaller_payload(telecaller_json: dict[str, Any]) -> StaffPerformancePayload:
    return StaffPerformancePayload.model_validate(telecaller_json)


@pytest.fixture
def counsellor_payload(counsellor_json: dict[str, Any]) -> StaffPerformancePayload:
    return StaffPerformancePayload.model_validate(counsellor_json)


@pytest.fixture
def dashboard_request(dashboard_json: dict[str, Any]) -> DashboardRequest:
    return DashboardRequest.model_validate(dashboard_json)


@pytest.fixture
def dashboard_service() -> DashboardService:
    """Service with default limits."""
    return DashboardService(Settings())
