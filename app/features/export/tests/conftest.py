"""Test fixtures for the export feature."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from app.core.config import Settings
from app.features.enrollment.schemas import DashboardRequest
from app.features.export.storage import InMemoryExportSink, LocalFSExportSink


@pytest.fixture
def dashboard_request(dashboard_json: dict[str, Any]) -> DashboardRequest:
    return DashboardRequest.model_validate(dashboard_json)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed export timestamp."""
    return datetime(2024, 3, 5, 14, 7, 9, tzinfo=UTC)


@pytest.fixture
def memory_sink() -> InMemoryExportSink:
    return InMemoryExportSink()


@pytest.fixture
def local_sink(tmp_path: Path) -> LocalFSExportSink:
    return LocalFSExportSink(root_dir=tmp_path / "exports")


@pytest.fixture
def settings() -> Settings:
    """Settings with default export options."""
    return Settings()
