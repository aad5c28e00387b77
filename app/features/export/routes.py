"""API routes for spreadsheet exports.

Downloads stream the workbook back as an attachment; the ``/files``
variant writes it into the configured export directory instead.
"""

from fastapi import APIRouter, Query, Response, status

from app.core.logging import get_logger
from app.features.enrollment.schemas import DashboardRequest
from app.features.export.schemas import ExportResult, WorkbookRequest
from app.features.export.service import ReportExportService
from app.features.export.storage import InMemoryExportSink, LocalFSExportSink
from app.features.export.workbook import XLSX_MEDIA_TYPE, WorkbookExporter

logger = get_logger(__name__)

router = APIRouter(prefix="/exports", tags=["exports"])

BASE_NAME_PATTERN = r"^[A-Za-z0-9._-]+$"


def _download(sink: InMemoryExportSink, result: ExportResult) -> Response:
    return Response(
        content=sink.get(result.filename),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.post(
    "/report",
    response_class=Response,
    summary="Download the enrollment report",
    description="""
Export enrollment levels, enrollment sources and staff performance into one
workbook (one sheet each) and return it as an `.xlsx` attachment named
`{base_name}-{YYYY-MM-DDTHH-MM-SS}.xlsx`.
""",
)
async def download_report(
    request: DashboardRequest,
    base_name: str | None = Query(None, pattern=BASE_NAME_PATTERN),
) -> Response:
    """Export the report as a download."""
    sink = InMemoryExportSink()
    result = ReportExportService(sink).export_report(request, base_name=base_name)
    return _download(sink, result)


@router.post(
    "/report/files",
    response_model=ExportResult,
    status_code=status.HTTP_201_CREATED,
    summary="Write the enrollment report to the export directory",
)
async def save_report(
    request: DashboardRequest,
    base_name: str | None = Query(None, pattern=BASE_NAME_PATTERN),
) -> ExportResult:
    """Export the report into the configured export directory.

    A file of the same name already in the directory is a 409; it is
    never overwritten.
    """
    return ReportExportService(LocalFSExportSink()).export_report(request, base_name=base_name)


@router.post(
    "/workbook",
    response_class=Response,
    summary="Download an arbitrary multi-sheet workbook",
    description="""
Write each `{sheet_name, rows, headers?}` entry as its own worksheet.
Nested objects in rows are flattened to `parent_child` columns and lists
become JSON text cells.
""",
)
async def download_workbook(request: WorkbookRequest) -> Response:
    """Export caller-supplied sheets as a download."""
    sink = InMemoryExportSink()
    result = WorkbookExporter(sink).export(request.sheets, base_name=request.base_name)
    return _download(sink, result)
