"""Multi-sheet workbook export.

Builds one worksheet per ExportSheet with pandas (openpyxl engine), names
the file with a second-granularity UTC timestamp and hands it to a sink.
Cell text is written as text: control characters Excel cannot store are
dropped and strings starting with ``=`` are never turned into formulas.
Failures surface as ExportError; nothing is retried.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from io import BytesIO
from typing import Any

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from app.core.config import Settings, get_settings
from app.core.exceptions import ExportError, ValidationError
from app.core.logging import get_logger
from app.features.export.flatten import flatten_record
from app.features.export.schemas import ExportResult, ExportSheet, SheetSummary
from app.features.export.storage import AbstractExportSink

logger = get_logger(__name__)

XLSX_EXTENSION = "xlsx"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


def export_filename(
    base_name: str,
    now: datetime | None = None,
    extension: str = XLSX_EXTENSION,
) -> str:
    """``{base_name}-{YYYY-MM-DDTHH-MM-SS}.{extension}`` in UTC.

    Naive datetimes are taken to be UTC already.
    """
    moment = now or datetime.now(UTC)
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return f"{base_name}-{moment.strftime(TIMESTAMP_FORMAT)}.{extension}"


def resolve_columns(
    rows: Sequence[Mapping[str, Any]],
    headers: Sequence[str] | None = None,
) -> list[str]:
    """Column order for a sheet.

    Explicit headers come first; then every other key in the order it is
    first seen, starting with the first row.
    """
    columns: dict[str, None] = dict.fromkeys(headers or ())
    for row in rows:
        for key in row:
            columns.setdefault(key, None)
    return list(columns)


def _validate_sheets(sheets: Sequence[ExportSheet]) -> None:
    if not sheets:
        raise ValidationError("At least one sheet is required for an export")
    seen: set[str] = set()
    for sheet in sheets:
        folded = sheet.sheet_name.casefold()
        if folded in seen:
            raise ValidationError(
                f"Duplicate sheet name '{sheet.sheet_name}'",
                details={"sheet_name": sheet.sheet_name},
            )
        seen.add(folded)


def _clean_row(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: ILLEGAL_CHARACTERS_RE.sub("", value) if isinstance(value, str) else value
        for key, value in row.items()
    }


def _keep_text(worksheet: Worksheet) -> None:
    """Store strings that look like formulas as plain text."""
    for row in worksheet.iter_rows():
        for cell in row:
            if cell.data_type == "f" and isinstance(cell.value, str):
                cell.data_type = "s"


def build_workbook(sheets: Sequence[ExportSheet]) -> tuple[bytes, list[SheetSummary]]:
    """Serialize sheets into an xlsx workbook.

    Args:
        sheets: Datasets in tab order.

    Returns:
        Tuple of (workbook bytes, per-sheet summaries).

    Raises:
        ValidationError: If there are no sheets or names collide.
        ExportError: If the workbook cannot be produced.
    """
    _validate_sheets(sheets)

    summaries: list[SheetSummary] = []
    buffer = BytesIO()
    try:
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            for sheet in sheets:
                rows = [_clean_row(flatten_record(row)) for row in sheet.rows]
                columns = resolve_columns(rows, sheet.headers)
                frame = pd.DataFrame(rows, columns=columns, dtype=object)
                frame.to_excel(writer, sheet_name=sheet.sheet_name, index=False)
                _keep_text(writer.sheets[sheet.sheet_name])
                summaries.append(
                    SheetSummary(
                        sheet_name=sheet.sheet_name,
                        row_count=len(rows),
                        columns=columns,
                    )
                )
    except (IllegalCharacterError, ValueError, TypeError, OSError) as e:
        logger.error(
            "export.workbook_failed",
            error=str(e),
            error_type=type(e).__name__,
            sheet_count=len(sheets),
            exc_info=True,
        )
        raise ExportError(f"Could not build workbook: {e}") from e

    return buffer.getvalue(), summaries


class WorkbookExporter:
    """Builds workbooks and delivers them to a sink.

    Example:
        >>> exporter = WorkbookExporter(LocalFSExportSink("./exports"))
        >>> result = exporter.export([ExportSheet(sheet_name="Levels", rows=rows)])
    """

    def __init__(self, sink: AbstractExportSink, settings: Settings | None = None) -> None:
        """Initialize exporter.

        Args:
            sink: Delivery target for finished workbooks.
            settings: Settings override (defaults to the cached singleton).
        """
        self.sink = sink
        self.settings = settings or get_settings()

    def export(
        self,
        sheets: Sequence[ExportSheet],
        base_name: str | None = None,
        now: datetime | None = None,
    ) -> ExportResult:
        """Write every sheet into one workbook and deliver it.

        Delivery is the only side effect; the file may be consumed
        asynchronously by the host after this returns.

        Args:
            sheets: Datasets in tab order.
            base_name: File name prefix (defaults to the configured one).
            now: Timestamp override, mainly for tests.

        Returns:
            Summary of what was written.

        Raises:
            ValidationError: If sheets are missing or invalid.
            ConflictError: If the sink already holds a file of that name.
            ExportError: If building or delivering the file fails.
        """
        created_at = now or datetime.now(UTC)
        filename = export_filename(base_name or self.settings.export_base_name, created_at)

        payload, summaries = build_workbook(sheets)
        location = self.sink.deliver(filename, payload)

        logger.info(
            "export.workbook_written",
            filename=filename,
            location=location,
            size_bytes=len(payload),
            sheets=[s.sheet_name for s in summaries],
            rows=[s.row_count for s in summaries],
        )

        return ExportResult(
            filename=filename,
            location=location,
            size_bytes=len(payload),
            sheets=summaries,
            created_at=created_at,
        )
