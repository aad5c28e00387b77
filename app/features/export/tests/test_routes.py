"""Route tests for the export endpoints."""

import re
from io import BytesIO
from pathlib import Path

import pandas as pd
import pytest
from httpx import AsyncClient

import app.features.export.workbook as workbook_module
from app.features.export.workbook import XLSX_MEDIA_TYPE

FILENAME_RE = r'attachment; filename="{base}-\d{{4}}-\d{{2}}-\d{{2}}T\d{{2}}-\d{{2}}-\d{{2}}\.xlsx"'


@pytest.mark.asyncio
async def test_download_report(client: AsyncClient, dashboard_json: dict) -> None:
    response = await client.post("/exports/report", json=dashboard_json)

    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_MEDIA_TYPE
    assert re.fullmatch(
        FILENAME_RE.format(base="student-enrollment-report"),
        response.headers["content-disposition"],
    )
    frames = pd.read_excel(BytesIO(response.content), sheet_name=None)
    assert [len(frame) for frame in frames.values()] == [9, 5, 5]


@pytest.mark.asyncio
async def test_download_report_base_name(client: AsyncClient, dashboard_json: dict) -> None:
    response = await client.post(
        "/exports/report", params={"base_name": "monthly"}, json=dashboard_json
    )

    assert response.status_code == 200
    assert re.fullmatch(FILENAME_RE.format(base="monthly"), response.headers["content-disposition"])


@pytest.mark.asyncio
async def test_unsafe_base_name_rejected(client: AsyncClient, dashboard_json: dict) -> None:
    response = await client.post(
        "/exports/report", params={"base_name": "../x"}, json=dashboard_json
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_save_report(client: AsyncClient, dashboard_json: dict, export_dir: Path) -> None:
    response = await client.post("/exports/report/files", json=dashboard_json)

    assert response.status_code == 201
    data = response.json()
    assert Path(data["location"]).parent == export_dir.resolve()
    assert Path(data["location"]).exists()
    assert [s["sheet_name"] for s in data["sheets"]] == [
        "Enrollment Levels",
        "Enrollment Sources",
        "Staff Performance",
    ]


@pytest.mark.asyncio
async def test_download_workbook(client: AsyncClient) -> None:
    body = {
        "sheets": [
            {"sheetName": "Raw", "rows": [{"a": {"b": 1}, "tags": [1, 2]}]},
            {"sheet_name": "Other", "rows": [], "headers": ["x"]},
        ],
        "base_name": "custom",
    }

    response = await client.post("/exports/workbook", json=body)

    assert response.status_code == 200
    assert re.fullmatch(FILENAME_RE.format(base="custom"), response.headers["content-disposition"])
    frames = pd.read_excel(BytesIO(response.content), sheet_name=None)
    assert list(frames["Raw"].columns) == ["a_b", "tags"]


@pytest.mark.asyncio
async def test_duplicate_sheet_names_rejected(client: AsyncClient) -> None:
    body = {"sheets": [{"sheet_name": "Data"}, {"sheet_name": "DATA"}]}

    response = await client.post("/exports/workbook", json=body)

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_long_sheet_name_rejected(client: AsyncClient) -> None:
    body = {"sheets": [{"sheet_name": "x" * 32}]}

    response = await client.post("/exports/workbook", json=body)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_save_report_name_clash_is_conflict(
    client: AsyncClient,
    dashboard_json: dict,
    export_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A second export landing on the same file name is a 409, not a server error."""
    monkeypatch.setattr(
        workbook_module, "export_filename", lambda base_name, now=None: f"{base_name}-fixed.xlsx"
    )

    first = await client.post("/exports/report/files", json=dashboard_json)
    second = await client.post("/exports/report/files", json=dashboard_json)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.headers["content-type"] == "application/problem+json"
    assert second.json()["code"] == "CONFLICT"
    assert (export_dir / "student-enrollment-report-fixed.xlsx").exists()
