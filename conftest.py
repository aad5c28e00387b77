"""Shared pytest fixtures for EnrollmentDash tests."""

from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import get_settings
from app.main import app


@pytest.fixture
async def client():
    """Create async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def export_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point EXPORT_DIR at a temporary directory for the duration of a test."""
    target = tmp_path / "exports"
    monkeypatch.setenv("EXPORT_DIR", str(target))
    get_settings.cache_clear()
    yield target
    get_settings.cache_clear()


# =============================================================================
# Enrollment API payloads
# =============================================================================


@pytest.fixture
def levels_json() -> dict[str, Any]:
    """Course level counts as returned by the enrollment API."""
    return {
        "data": [
            {"course": "A Levels Science", "levels": [{"level": "UNKNOWN", "count": 10}]},
            {
                "course": "Acca",
                "levels": [{"level": "UNKNOWN", "count": 5}, {"level": "l3", "count": 1}],
            },
            {
                "course": "Bachelors in Information Technology",
                "levels": [
                    {"level": "l4", "count": 2},
                    {"level": "l3", "count": 1},
                    {"level": "UNKNOWN", "count": 1},
                ],
            },
            {
                "course": "MBA",
                "levels": [
                    {"level": "l4", "count": 2},
                    {"level": "l5", "count": 1},
                    {"level": "UNKNOWN", "count": 6},
                ],
            },
        ]
    }


@pytest.fixture
def sources_json() -> dict[str, Any]:
    """Lead source counts as returned by the enrollment API."""
    return {
        "data": [
            {
                "sourceName": "WALKIN",
                "courses": [
                    {"courseName": "Masters In Information Management", "count": 7},
                    {"courseName": "MBA", "count": 9},
                ],
            },
            {
                "sourceName": "SOCIAL_MEDIA",
                "courses": [
                    {"courseName": "A Levels Science", "count": 3},
                    {"courseName": "Acca", "count": 0},
                ],
            },
            {
                "sourceName": "AGENCY",
                "courses": [{"courseName": "Bsc Hotel Science", "count": 6}],
            },
        ]
    }


@pytest.fixture
def telecaller_json() -> dict[str, Any]:
    """Telecaller performance envelope."""
    return {
        "statusCode": 200,
        "message": "Telecaller assigned total fetched",
        "data": [
            {"courseName": "BBA (Hons) Business and Management", "count": 1, "type": "BACHELORS"},
            {"courseName": "BSc (Hons) Computer Science", "count": 5, "type": "BACHELORS"},
            {"courseName": "Acca", "count": 3, "type": "ACCA"},
            {"courseName": "Foundation Year", "count": 0, "type": "FOUNDATION"},
        ],
    }


@pytest.fixture
def counsellor_json() -> dict[str, Any]:
    """Counsellor performance envelope."""
    return {
        "statusCode": 200,
        "message": "Counsellor assigned total fetched",
        "data": [
            {"courseName": "BSc (Hons) Computer Science", "count": 2, "type": "BACHELORS"},
            {"courseName": "Acca", "count": 4, "type": "ACCA"},
            {"courseName": "MBA", "count": 6, "type": "MASTERS"},
        ],
    }


@pytest.fixture
def dashboard_json(
    levels_json: dict[str, Any],
    sources_json: dict[str, Any],
    telecaller_json: dict[str, Any],
    counsellor_json: dict[str, Any],
) -> dict[str, Any]:
    """Request body for the full dashboard and the report export."""
    return {
        "levels": levels_json,
        "sources": sources_json,
        "telecaller": telecaller_json,
        "counsellor": counsellor_json,
    }
