"""
Parser for run result dumps produced by the test host.

The host keeps its results as nested mappings keyed by runner id, spec
id, suite name, hook name and test name. This module turns such a dump
(JSON or YAML) into the ordered models in
:mod:`doc_reporter.reporting.models`, keeping mapping order and the raw
property names of suites and specs.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import yaml

from doc_reporter.core.errors import MalformedResultError, PathNotFoundError
from doc_reporter.core.logging import get_logger
from doc_reporter.reporting.models import (
    HookResult,
    RunnerConfig,
    RunnerInfo,
    RunResult,
    SpecResult,
    SuiteResult,
    TestError,
    TestResult,
)

logger = get_logger(__name__)


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise MalformedResultError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _title(data: Mapping[str, Any], name: str) -> str:
    title = data.get("title")
    return name if title is None else str(title)


def parse_test(name: str, data: Mapping[str, Any]) -> TestResult:
    data = _mapping(data, f"test {name!r}")
    error = None
    raw_error = data.get("error")
    if isinstance(raw_error, Mapping):
        error = TestError(
            type=raw_error.get("type"),
            message=raw_error.get("message"),
            stack=raw_error.get("stack"),
        )
    elif raw_error:
        error = TestError(message=str(raw_error))

    return TestResult(
        title=_title(data, name),
        state=data.get("state"),
        start=data.get("start"),
        end=data.get("end"),
        duration=data.get("duration", data.get("_duration")),
        error=error,
        name=name,
    )


def parse_hook(name: str, data: Mapping[str, Any]) -> HookResult:
    data = _mapping(data, f"hook {name!r}")
    return HookResult(
        title=_title(data, name),
        start=data.get("start"),
        end=data.get("end"),
        duration=data.get("duration", data.get("_duration")),
        parent=data.get("parent"),
        current_test=data.get("currentTest"),
        name=name,
    )


def parse_suite(name: str, data: Mapping[str, Any]) -> SuiteResult:
    data = _mapping(data, f"suite {name!r}")
    hooks = _mapping(data.get("hooks"), f"hooks of suite {name!r}")
    tests = _mapping(data.get("tests"), f"tests of suite {name!r}")
    return SuiteResult(
        title=_title(data, name),
        duration=data.get("_duration", data.get("duration")),
        start=data.get("start"),
        end=data.get("end"),
        hooks=[parse_hook(k, v) for k, v in hooks.items()],
        tests=[parse_test(k, v) for k, v in tests.items()],
        property_names=list(data.keys()),
        name=name,
    )


def parse_spec(spec_id: str, data: Mapping[str, Any]) -> SpecResult:
    data = _mapping(data, f"spec {spec_id!r}")
    files = data.get("files") or []
    if isinstance(files, str):
        files = [files]
    suites = _mapping(data.get("suites"), f"suites of spec {spec_id!r}")
    return SpecResult(
        files=[str(f) for f in files],
        suites=[parse_suite(k, v) for k, v in suites.items()],
        property_names=list(data.keys()),
        spec_id=spec_id,
    )


def parse_runner(runner_id: str, data: Mapping[str, Any]) -> RunnerInfo:
    data = _mapping(data, f"runner {runner_id!r}")
    config = _mapping(data.get("config"), f"config of runner {runner_id!r}")
    specs = _mapping(data.get("specs"), f"specs of runner {runner_id!r}")
    return RunnerInfo(
        capabilities=data.get("capabilities"),
        config=RunnerConfig(
            host=config.get("host"),
            port=config.get("port"),
            base_url=config.get("baseUrl"),
            wait_for_timeout=config.get("waitforTimeout", config.get("waitForTimeout")),
            framework=config.get("framework"),
            framework_options=config.get("mochaOpts"),
        ),
        specs=[parse_spec(k, v) for k, v in specs.items()],
        runner_id=runner_id,
    )


def parse_run_result(data: Mapping[str, Any]) -> RunResult:
    """
    Build a RunResult from a host result mapping.

    Accepts either ``{"start", "end", "runners"}`` or the host's
    ``{"stats": {"start", "end", "runners"}}`` layout.

    Raises:
        MalformedResultError: If the payload does not have the expected shape
    """
    data = _mapping(data, "run result")
    if "stats" in data and "runners" not in data:
        data = _mapping(data["stats"], "stats")

    runners = _mapping(data.get("runners"), "runners")
    result = RunResult(
        start=data.get("start"),
        end=data.get("end"),
        runners=[parse_runner(str(k), v) for k, v in runners.items()],
    )
    logger.debug(f"Parsed run result with {len(result.runners)} runner(s)")
    return result


def load_run_result(path: Union[str, Path]) -> RunResult:
    """
    Load a run result dump from a JSON or YAML file.

    Raises:
        PathNotFoundError: If the file does not exist
        MalformedResultError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise PathNotFoundError(f"Run result file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise MalformedResultError(f"Failed to parse run result file {path}: {e}") from e

    return parse_run_result(data)


def runner_ids(result: RunResult) -> List[str]:
    return [runner.runner_id or str(i) for i, runner in enumerate(result.runners)]


def index_runners(result: RunResult) -> Dict[str, RunnerInfo]:
    return dict(zip(runner_ids(result), result.runners))
