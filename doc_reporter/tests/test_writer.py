from pathlib import Path
import json
import logging

from doc_reporter.core.config import Config
from doc_reporter.core.errors import ConfigurationError, ReportWriteError
from doc_reporter.reporting.models import NarrativeDocument, ResultDocument, StateCounts
from doc_reporter.reporting.writer import PersistStatus, ReportWriter


def _config(tmp_path: Path, **kwargs) -> Config:
    kwargs.setdefault("output_dir", str(tmp_path / "docs"))
    kwargs.setdefault("screenshot_dir", tmp_path / "screenShots")
    return Config(load_config_file=False, **kwargs)


def _document(tmp_path: Path) -> ResultDocument:
    return ResultDocument(
        start="s",
        end="e",
        file=f"{tmp_path}/build/features/home.feature",
        state=StateCounts(passed=1),
    )


def _narrative() -> NarrativeDocument:
    return NarrativeDocument(lines=["## Home", "1. open home"])


def test_persist_writes_json_and_markdown(tmp_path: Path) -> None:
    result = ReportWriter(_config(tmp_path)).persist(_document(tmp_path), _narrative())

    json_path = tmp_path / "publish" / "output" / "features" / "home.json"
    md_path = tmp_path / "publish" / "output" / "features" / "home.md"
    assert result.status == PersistStatus.SUCCESS
    assert result.json_path == json_path
    assert result.md_path == md_path
    data = json.loads(json_path.read_text())
    assert data["state"] == {"passed": 1, "failed": 0, "skipped": 0}
    assert data["file"].endswith("/build/features/home.feature")
    assert md_path.read_text() == "## Home\n1. open home\n"


def test_json_is_compact_by_default_and_indented_on_request(tmp_path: Path) -> None:
    compact = ReportWriter(_config(tmp_path)).serialize(_document(tmp_path))
    pretty = ReportWriter(_config(tmp_path, json_indent=2)).serialize(_document(tmp_path))
    assert "\n" not in compact
    assert '"start":"s"' in compact
    assert "\n" in pretty
    assert json.loads(compact) == json.loads(pretty)


def test_screenshots_are_moved_next_to_the_reports(tmp_path: Path) -> None:
    capture_dir = tmp_path / "screenShots"
    capture_dir.mkdir()
    (capture_dir / "home-page.png").write_bytes(b"png")
    (capture_dir / "cart.png").write_bytes(b"png")

    result = ReportWriter(_config(tmp_path)).persist(_document(tmp_path), _narrative())

    target_dir = tmp_path / "publish" / "output" / "features"
    assert [p.name for p in result.screenshots] == ["cart.png", "home-page.png"]
    assert (target_dir / "home-page.png").read_bytes() == b"png"
    assert list(capture_dir.iterdir()) == []


def test_missing_capture_dir_is_created(tmp_path: Path) -> None:
    result = ReportWriter(_config(tmp_path)).persist(_document(tmp_path), _narrative())
    assert result.success
    assert result.screenshots == []
    assert (tmp_path / "screenShots").is_dir()


def test_missing_output_dir_writes_nothing(tmp_path: Path, caplog) -> None:
    config = _config(tmp_path, output_dir=None)

    with caplog.at_level(logging.ERROR):
        result = ReportWriter(config).persist(_document(tmp_path), _narrative())

    assert result.skipped
    assert isinstance(result.error, ConfigurationError)
    assert "outputDir" in caplog.text
    assert not (tmp_path / "publish").exists()


def test_non_string_output_dir_is_rejected(tmp_path: Path) -> None:
    result = ReportWriter(_config(tmp_path, output_dir=42)).persist(_document(tmp_path), _narrative())
    assert result.skipped
    assert "outputDir" in result.message


def test_write_failure_is_reported_not_raised(tmp_path: Path, caplog) -> None:
    (tmp_path / "publish").write_text("not a directory")
    config = _config(tmp_path)

    with caplog.at_level(logging.ERROR):
        result = ReportWriter(config).persist(_document(tmp_path), _narrative())

    assert result.status == PersistStatus.FAILED
    assert isinstance(result.error, ReportWriteError)
    assert isinstance(result.error.__cause__, OSError)
    assert config.output_dir in caplog.text


def test_document_without_file_fails_cleanly(tmp_path: Path) -> None:
    document = ResultDocument(start="s", end="e")
    result = ReportWriter(_config(tmp_path)).persist(document, _narrative())
    assert result.status == PersistStatus.FAILED
    assert "no source file" in result.message


def test_encoding_failure_is_reported_not_raised(tmp_path: Path, caplog) -> None:
    narrative = NarrativeDocument(lines=["## Broken \ud800"])

    with caplog.at_level(logging.ERROR):
        result = ReportWriter(_config(tmp_path)).persist(_document(tmp_path), narrative)

    assert result.status == PersistStatus.FAILED
    assert isinstance(result.error, ReportWriteError)
    assert isinstance(result.error.__cause__, UnicodeEncodeError)
    assert "Failed to write report" in caplog.text
