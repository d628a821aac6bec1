"""
Report writer: persists result documents and narratives, and moves
captured screenshots next to them.
"""

import json
import shutil
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from doc_reporter.core.config import Config
from doc_reporter.core.errors import ConfigurationError, DocReporterError, ReportWriteError
from doc_reporter.core.logging import get_logger
from doc_reporter.reporting.models import NarrativeDocument, ResultDocument
from doc_reporter.reporting.paths import derive_report_paths


class PersistStatus(Enum):
    """Outcome of persisting one runner's reports."""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class PersistResult:
    """Result of persisting one runner's reports."""
    status: PersistStatus
    message: str
    json_path: Optional[Path] = None
    md_path: Optional[Path] = None
    screenshots: List[Path] = field(default_factory=list)
    error: Optional[DocReporterError] = None

    @property
    def success(self) -> bool:
        return self.status == PersistStatus.SUCCESS

    @property
    def skipped(self) -> bool:
        return self.status == PersistStatus.SKIPPED


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return str(value)


class ReportWriter:
    """Write report documents to their publish location."""

    def __init__(self, config: Config):
        self.config = config
        self.logger = get_logger(__name__)

    def target_paths(self, document: ResultDocument):
        """JSON and Markdown publish paths for a document's canonical file."""
        if not document.file:
            raise ReportWriteError("result document has no source file", self.config.output_dir)
        json_path, md_path = derive_report_paths(
            document.file,
            build_segment=self.config.build_segment,
            publish_segment=self.config.publish_segment,
            source_extension=self.config.source_extension,
        )
        return Path(json_path), Path(md_path)

    def serialize(self, document: ResultDocument) -> str:
        """Serialize a result document to JSON text."""
        if self.config.json_indent is None:
            return json.dumps(document.to_dict(), separators=(",", ":"), default=_json_default)
        return json.dumps(document.to_dict(), indent=self.config.json_indent, default=_json_default)

    def relocate_screenshots(self, destination: Path) -> List[Path]:
        """
        Move every file in the screenshot capture directory into destination.

        The capture directory is created when missing so the host can keep
        writing into it. Files are moved in name order.

        Returns:
            Paths of the moved files at their new location
        """
        capture_dir = self.config.screenshot_dir
        capture_dir.mkdir(parents=True, exist_ok=True)

        moved = []
        for entry in sorted(capture_dir.iterdir()):
            if not entry.is_file():
                continue
            target = destination / entry.name
            shutil.move(str(entry), str(target))
            moved.append(target)

        if moved:
            self.logger.info(f"Moved {len(moved)} screenshot(s) to {destination}")
        return moved

    def persist(self, document: ResultDocument, narrative: NarrativeDocument) -> PersistResult:
        """
        Write the JSON and Markdown reports and relocate screenshots.

        Failures are logged and returned, never raised.

        Args:
            document: Result document of one runner
            narrative: Narrative of the same runner

        Returns:
            PersistResult describing what was written
        """
        try:
            self.config.validate_output_dir()
        except ConfigurationError as e:
            self.logger.error(f"Cannot write report: {e}.")
            return PersistResult(
                status=PersistStatus.SKIPPED,
                message=f"Cannot write report: {e}",
                error=e,
            )

        try:
            json_path, md_path = self.target_paths(document)

            json_path.parent.mkdir(parents=True, exist_ok=True)
            json_path.write_text(self.serialize(document), encoding="utf-8")

            md_path.parent.mkdir(parents=True, exist_ok=True)
            md_path.write_text(narrative.render(), encoding="utf-8")

            screenshots = self.relocate_screenshots(json_path.parent)
        except Exception as e:
            error = e if isinstance(e, ReportWriteError) else ReportWriteError(str(e), self.config.output_dir)
            if error is not e:
                error.__cause__ = e
            message = f"Failed to write report to [{self.config.output_dir}]. Error: {e}"
            self.logger.error(message)
            return PersistResult(
                status=PersistStatus.FAILED,
                message=message,
                error=error,
            )

        self.logger.info(f"Wrote {json_path} and {md_path}")
        return PersistResult(
            status=PersistStatus.SUCCESS,
            message=f"Wrote {json_path.name} and {md_path.name}",
            json_path=json_path,
            md_path=md_path,
            screenshots=screenshots,
        )
