"""
Host-facing reporter.

The test host calls :meth:`DocReporter.on_end` once, after all execution
has finished. Each runner is transformed and persisted in turn, then the
host's own summary (``base_reporter.epilogue()``) is printed.
"""

from typing import Any, Dict, List, Optional

from doc_reporter.core.config import Config
from doc_reporter.core.errors import DocReporterError, ReportWriteError
from doc_reporter.core.logging import get_logger
from doc_reporter.reporting.models import ResultDocument, RunnerInfo, RunResult
from doc_reporter.reporting.parser import runner_ids
from doc_reporter.reporting.transformer import build_narrative_document, build_result_document
from doc_reporter.reporting.writer import PersistResult, PersistStatus, ReportWriter


class DocReporter:
    """Writes a JSON result document and a Markdown narrative per runner."""

    reporter_name = "DocReporter"

    def __init__(self, base_reporter: Any = None, config: Optional[Config] = None,
                 options: Optional[Dict[str, Any]] = None):
        """
        Args:
            base_reporter: Host reporter exposing ``epilogue()``; may be None
            config: Reporter configuration (built from options if omitted)
            options: Host reporter options, e.g. ``{"outputDir": "docs"}``
        """
        self.base_reporter = base_reporter
        self.options = options or {}
        self.config = config if config is not None else Config.from_options(self.options)
        self.writer = ReportWriter(self.config)
        self.documents: Dict[str, ResultDocument] = {}
        self.logger = get_logger(__name__)

    def report_runner(self, start: Any, end: Any, runner_info: RunnerInfo,
                      runner_id: Optional[str] = None) -> PersistResult:
        """Transform and persist one runner's results."""
        document = build_result_document(start, end, runner_info, build_segment=self.config.build_segment)
        self.documents[runner_id or runner_info.runner_id] = document
        narrative = build_narrative_document(runner_info)
        return self.writer.persist(document, narrative)

    def on_end(self, run_result: RunResult) -> List[PersistResult]:
        """
        Handle the run-completion event.

        A failure on one runner is logged and does not stop the others,
        and the host summary is printed in every case.

        Returns:
            One PersistResult per runner, in runner order
        """
        results = []
        try:
            for runner_id, runner_info in zip(runner_ids(run_result), run_result.runners):
                try:
                    result = self.report_runner(run_result.start, run_result.end, runner_info, runner_id)
                except Exception as e:
                    error = e if isinstance(e, DocReporterError) else ReportWriteError(str(e), self.config.output_dir)
                    if error is not e:
                        error.__cause__ = e
                    self.logger.error(f"Report for runner {runner_id} failed: {e}")
                    result = PersistResult(status=PersistStatus.FAILED, message=str(e), error=error)
                results.append(result)
        finally:
            self._epilogue()
        return results

    def _epilogue(self) -> None:
        epilogue = getattr(self.base_reporter, "epilogue", None)
        if callable(epilogue):
            epilogue()
