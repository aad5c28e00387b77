"""Tests for export request schemas."""

import pytest
from pydantic import ValidationError

from app.features.export.schemas import ExportSheet, WorkbookRequest


class TestExportSheet:
    """Tests for ExportSheet validation."""

    def test_camel_case_input(self) -> None:
        sheet = ExportSheet.model_validate({"sheetName": "Levels", "data": [{"a": 1}]})

        assert sheet.sheet_name == "Levels"
        assert sheet.rows == [{"a": 1}]

    def test_name_is_stripped(self) -> None:
        assert ExportSheet(sheet_name="  Levels ").sheet_name == "Levels"

    def test_max_length_name_is_accepted(self) -> None:
        assert len(ExportSheet(sheet_name="x" * 31).sheet_name) == 31

    @pytest.mark.parametrize("name", ["", "   ", "x" * 32, "Levels/Sources", "Q1:Q2", "what?"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(ValidationError):
            ExportSheet(sheet_name=name)


class TestWorkbookRequest:
    """Tests for WorkbookRequest validation."""

    def test_requires_a_sheet(self) -> None:
        with pytest.raises(ValidationError):
            WorkbookRequest(sheets=[])

    @pytest.mark.parametrize("base_name", ["../etc", "a b", "report/x"])
    def test_rejects_unsafe_base_names(self, base_name: str) -> None:
        with pytest.raises(ValidationError):
            WorkbookRequest(sheets=[ExportSheet(sheet_name="S")], base_name=base_name)
