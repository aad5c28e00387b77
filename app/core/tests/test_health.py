"""Tests for health check endpoints."""

from pathlib import Path

import pytest


@pytest.mark.asyncio
async def test_health_check_returns_ok(client):
    """Health endpoint should return status ok."""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_with_writable_export_dir(client, export_dir: Path):
    """Readiness should create the export directory and leave no probe file."""
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "export_dir": "writable"}
    assert export_dir.is_dir()
    assert list(export_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_readiness_degraded_when_export_dir_unusable(client, export_dir: Path):
    """A file in place of the export directory only degrades readiness."""
    export_dir.parent.mkdir(parents=True, exist_ok=True)
    export_dir.write_bytes(b"")

    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "degraded", "export_dir": "unwritable"}
