"""Pydantic schemas for spreadsheet exports."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Excel limits sheet titles to 31 characters and forbids these characters.
MAX_SHEET_NAME_LENGTH = 31
FORBIDDEN_SHEET_CHARS = frozenset("[]:*?/\\")


class ExportSheet(BaseModel):
    """One named dataset, written as one worksheet.

    Rows are mappings of column name to value; nested mappings and
    sequences are flattened before writing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sheet_name: str = Field(
        ...,
        validation_alias=AliasChoices("sheetName", "sheet_name"),
        description="Worksheet title (max 31 characters, no []:*?/\\).",
    )
    rows: list[dict[str, Any]] = Field(
        default_factory=list,
        validation_alias=AliasChoices("rows", "data"),
        description="Ordered rows. Columns follow the first row's keys unless headers are given.",
    )
    headers: list[str] | None = Field(
        None,
        description="Explicit column order. Keys not listed are appended after these.",
    )

    @field_validator("sheet_name")
    @classmethod
    def validate_sheet_name(cls, v: str) -> str:
        """Reject titles Excel would refuse."""
        name = v.strip()
        if not name:
            raise ValueError("sheet_name must not be empty")
        if len(name) > MAX_SHEET_NAME_LENGTH:
            raise ValueError(
                f"sheet_name '{name}' exceeds {MAX_SHEET_NAME_LENGTH} characters"
            )
        bad = sorted(set(name) & FORBIDDEN_SHEET_CHARS)
        if bad:
            raise ValueError(f"sheet_name '{name}' contains forbidden characters {bad}")
        return name


class WorkbookRequest(BaseModel):
    """Generic multi-sheet export request."""

    sheets: list[ExportSheet] = Field(..., min_length=1)
    base_name: str | None = Field(
        None,
        pattern=r"^[A-Za-z0-9._-]+$",
        description="File name prefix. Defaults to the configured export base name.",
    )


class SheetSummary(BaseModel):
    """What was written to one worksheet."""

    sheet_name: str
    row_count: int = Field(..., ge=0)
    columns: list[str]


class ExportResult(BaseModel):
    """Outcome of a successful export."""

    filename: str = Field(..., description="'{base}-{YYYY-MM-DDTHH-MM-SS}.xlsx'")
    location: str | None = Field(
        None,
        description="Where the file was written. Null for in-memory downloads.",
    )
    size_bytes: int = Field(..., ge=0)
    sheets: list[SheetSummary]
    created_at: datetime
