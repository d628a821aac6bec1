"""
Command-line interface for Doc Reporter.

This module provides a subcommand-based CLI using Typer.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

import typer

from doc_reporter.core.config import Config
from doc_reporter.core.errors import DocReporterError
from doc_reporter.core.logging import setup_logger
from doc_reporter.reporting.models import ResultDocument, RunResult
from doc_reporter.reporting.parser import index_runners, load_run_result
from doc_reporter.reporting.paths import derive_report_paths
from doc_reporter.reporting.reporter import DocReporter
from doc_reporter.reporting.transformer import build_narrative_document

app = typer.Typer(
    name="doc_reporter",
    help="Publish test runs as documentation - JSON results and Markdown narratives",
    add_completion=False,
)


class ConsoleSummary:
    """Console summary printed after the reports are written."""

    def __init__(self, documents: Dict[str, ResultDocument]):
        self.documents = documents

    def epilogue(self) -> None:
        for runner_id, document in self.documents.items():
            counts = document.state
            typer.echo(
                f"[{runner_id}] {counts.passed} passed, {counts.failed} failed, "
                f"{counts.skipped} skipped ({len(document.suites)} suites)"
            )


def get_config(verbosity: Optional[int] = None, **kwargs) -> Config:
    """Create and configure Config object."""
    init_kwargs = {}
    for key, value in kwargs.items():
        if key in Config.__dataclass_fields__ and value is not None:
            init_kwargs[key] = value
    config = Config(**init_kwargs)
    if verbosity is not None:
        if not 0 <= verbosity <= 3:
            raise ValueError(f"verbosity must be between 0 and 3, got {verbosity}")
        config.verbosity = verbosity
    return config


def load_or_exit(result_file: Path) -> RunResult:
    """Load a run result dump, exiting with code 1 when it cannot be read."""
    try:
        return load_run_result(result_file)
    except DocReporterError as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(1)


@app.command()
def generate(
    result_file: Path = typer.Argument(..., help="Run result dump (JSON or YAML)"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Report output directory (outputDir)"),
    screenshot_dir: Optional[Path] = typer.Option(None, help="Screenshot capture directory"),
    build_segment: Optional[str] = typer.Option(None, help="Build path segment to replace"),
    publish_segment: Optional[str] = typer.Option(None, help="Publish path segment to substitute"),
    source_extension: Optional[str] = typer.Option(None, help="Spec file extension to swap"),
    json_indent: Optional[int] = typer.Option(None, help="Pretty-print JSON with this indent"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
):
    """Write JSON and Markdown reports for every runner of a finished run."""
    config = get_config(
        verbosity=verbosity,
        output_dir=output_dir,
        screenshot_dir=screenshot_dir,
        build_segment=build_segment,
        publish_segment=publish_segment,
        source_extension=source_extension,
        json_indent=json_indent,
    )
    setup_logger(verbosity=config.verbosity)

    run_result = load_or_exit(result_file)
    reporter = DocReporter(config=config)
    reporter.base_reporter = ConsoleSummary(reporter.documents)
    results = reporter.on_end(run_result)

    for result in results:
        if result.success:
            typer.echo(f"✓ {result.json_path}")
            typer.echo(f"✓ {result.md_path}")
        elif result.skipped:
            typer.echo(f"⊘ {result.message}", err=True)
        else:
            typer.echo(f"✗ {result.message}", err=True)

    if any(not r.success for r in results):
        sys.exit(1)
    sys.exit(0)


@app.command()
def preview(
    result_file: Path = typer.Argument(..., help="Run result dump (JSON or YAML)"),
    runner: Optional[str] = typer.Option(None, help="Only show this runner"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
):
    """Print the Markdown narrative of each runner without writing anything."""
    setup_logger(verbosity=verbosity or 0)
    run_result = load_or_exit(result_file)
    runners = index_runners(run_result)

    if runner is not None:
        if runner not in runners:
            typer.echo(f"✗ Unknown runner: {runner}", err=True)
            sys.exit(1)
        runners = {runner: runners[runner]}

    for runner_id, runner_info in runners.items():
        if len(runners) > 1:
            typer.echo(f"<!-- runner {runner_id} -->")
        typer.echo(build_narrative_document(runner_info).render(), nl=False)


@app.command()
def paths(
    spec_file: str = typer.Argument(..., help="Canonical spec file path"),
    build_segment: Optional[str] = typer.Option(None, help="Build path segment to replace"),
    publish_segment: Optional[str] = typer.Option(None, help="Publish path segment to substitute"),
    source_extension: Optional[str] = typer.Option(None, help="Spec file extension to swap"),
):
    """Show where the reports for a spec file will be published."""
    config = get_config(
        build_segment=build_segment,
        publish_segment=publish_segment,
        source_extension=source_extension,
    )
    json_path, md_path = derive_report_paths(
        spec_file,
        build_segment=config.build_segment,
        publish_segment=config.publish_segment,
        source_extension=config.source_extension,
    )
    typer.echo(f"JSON: {json_path}")
    typer.echo(f"MD:   {md_path}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
