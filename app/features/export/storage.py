"""Delivery targets for exported workbooks.

A sink receives the finished file bytes and its name. LocalFS writes into
the export directory; InMemory keeps the bytes for an HTTP download.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from app.core.config import get_settings
from app.core.exceptions import ConflictError, ExportError
from app.core.logging import get_logger

logger = get_logger(__name__)


class AbstractExportSink(ABC):
    """Where an exported workbook ends up."""

    @abstractmethod
    def deliver(self, filename: str, payload: bytes) -> str | None:
        """Hand over a finished workbook.

        Args:
            filename: Target file name (no directories).
            payload: Serialized workbook.

        Returns:
            Location of the written file, or None when kept in memory.

        Raises:
            ConflictError: If a file of that name already exists.
            ExportError: If the host refuses the file.
        """


class LocalFSExportSink(AbstractExportSink):
    """Writes workbooks into a local export directory.

    Files are created exclusively: an existing file with the same name is
    a ConflictError, never overwritten.
    """

    def __init__(self, root_dir: Path | str | None = None) -> None:
        """Initialize with root directory.

        Args:
            root_dir: Export directory. Defaults to Settings value.
        """
        if root_dir is None:
            root_dir = Path(get_settings().export_dir)
        self.root_dir = Path(root_dir).resolve()

    def _resolve_path(self, filename: str) -> Path:
        path = (self.root_dir / filename).resolve()
        if path.parent != self.root_dir:
            raise ExportError(
                f"Refusing to write outside the export directory: {filename}",
                details={"filename": filename},
            )
        return path

    def deliver(self, filename: str, payload: bytes) -> str:
        path = self._resolve_path(filename)
        try:
            self.root_dir.mkdir(parents=True, exist_ok=True)
            with path.open("xb") as f:
                f.write(payload)
        except FileExistsError as e:
            raise ConflictError(
                f"Export file already exists: {filename}",
                details={"path": str(path)},
            ) from e
        except OSError as e:
            logger.error(
                "export.write_failed",
                path=str(path),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExportError(
                f"Could not write export file {filename}: {e}",
                details={"path": str(path)},
            ) from e

        logger.info("export.file_written", path=str(path), size_bytes=len(payload))
        return str(path)


class InMemoryExportSink(AbstractExportSink):
    """Keeps workbooks in memory, keyed by file name."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}

    def deliver(self, filename: str, payload: bytes) -> None:
        self.files[filename] = payload
        return None

    def get(self, filename: str) -> bytes:
        """Bytes of a delivered workbook.

        Raises:
            ExportError: If nothing was delivered under that name.
        """
        try:
            return self.files[filename]
        except KeyError as e:
            raise ExportError(f"No export named {filename}") from e
