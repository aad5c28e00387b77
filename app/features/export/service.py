"""The "export everything" action of the enrollment dashboard."""

from datetime import datetime

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.features.enrollment.aggregation import JoinMode
from app.features.enrollment.schemas import DashboardRequest
from app.features.export.schemas import ExportResult, ExportSheet
from app.features.export.shapers import (
    LEVEL_HEADERS,
    SOURCE_HEADERS,
    STAFF_HEADERS,
    shape_levels,
    shape_sources,
    shape_staff_performance,
)
from app.features.export.storage import AbstractExportSink
from app.features.export.workbook import WorkbookExporter

logger = get_logger(__name__)

LEVELS_SHEET = "Enrollment Levels"
SOURCES_SHEET = "Enrollment Sources"
STAFF_SHEET = "Staff Performance"


class ReportExportService:
    """Exports the dashboard datasets as a three-sheet enrollment report."""

    def __init__(self, sink: AbstractExportSink, settings: Settings | None = None) -> None:
        """Initialize report export service.

        Args:
            sink: Delivery target for the workbook.
            settings: Settings override (defaults to the cached singleton).
        """
        self.settings = settings or get_settings()
        self.exporter = WorkbookExporter(sink, self.settings)

    def build_report_sheets(self, request: DashboardRequest) -> list[ExportSheet]:
        """Shape the raw datasets into the report's sheets, in tab order."""
        return [
            ExportSheet(
                sheet_name=LEVELS_SHEET,
                rows=shape_levels(request.levels.data),
                headers=LEVEL_HEADERS,
            ),
            ExportSheet(
                sheet_name=SOURCES_SHEET,
                rows=shape_sources(request.sources.data),
                headers=SOURCE_HEADERS,
            ),
            ExportSheet(
                sheet_name=STAFF_SHEET,
                rows=shape_staff_performance(
                    request.telecaller.data,
                    request.counsellor.data,
                    mode=JoinMode(self.settings.export_staff_join),
                ),
                headers=STAFF_HEADERS,
            ),
        ]

    def export_report(
        self,
        request: DashboardRequest,
        base_name: str | None = None,
        now: datetime | None = None,
    ) -> ExportResult:
        """Export every dataset into one workbook.

        Raises:
            ExportError: If the workbook cannot be produced or delivered.
        """
        sheets = self.build_report_sheets(request)
        logger.info(
            "export.report_started",
            sheets=[sheet.sheet_name for sheet in sheets],
            staff_join=self.settings.export_staff_join,
        )
        return self.exporter.export(sheets, base_name=base_name, now=now)
