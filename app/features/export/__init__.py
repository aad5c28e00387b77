"""Spreadsheet export of enrollment datasets.

Shapers flatten raw records into rows, the workbook builder writes one
sheet per dataset, and sinks deliver the file (download or export directory).
"""

from app.features.export.flatten import flatten_record
from app.features.export.routes import router
from app.features.export.schemas import ExportResult, ExportSheet, SheetSummary
from app.features.export.service import ReportExportService
from app.features.export.shapers import (
    shape_levels,
    shape_sources,
    shape_staff_performance,
)
from app.features.export.storage import (
    AbstractExportSink,
    InMemoryExportSink,
    LocalFSExportSink,
)
from app.features.export.workbook import WorkbookExporter, build_workbook, export_filename

__all__ = [
    "AbstractExportSink",
    "ExportResult",
    "ExportSheet",
    "InMemoryExportSink",
    "LocalFSExportSink",
    "ReportExportService",
    "SheetSummary",
    "WorkbookExporter",
    "build_workbook",
    "export_filename",
    "flatten_record",
    "router",
    "shape_levels",
    "shape_sources",
    "shape_staff_performance",
]
