from pathlib import Path
import json

import pytest

from doc_reporter.core.errors import MalformedResultError, PathNotFoundError
from doc_reporter.reporting.parser import load_run_result, parse_run_result

HOST_STATS = {
    "stats": {
        "start": "2024-01-01T10:00:00Z",
        "end": "2024-01-01T10:01:00Z",
        "runners": {
            "0-0": {
                "capabilities": {"browserName": "chrome"},
                "config": {
                    "host": "127.0.0.1",
                    "port": 4444,
                    "baseUrl": "http://localhost",
                    "waitforTimeout": 1000,
                    "framework": "mocha",
                    "mochaOpts": {"timeout": 2000},
                },
                "specs": {
                    "abc": {
                        "files": ["/repo/build/features/login.feature"],
                        "suites": {
                            "Login1": {
                                "title": "Login",
                                "_duration": 12,
                                "start": 1,
                                "end": 13,
                                "hooks": {
                                    "\"before all\" hook3": {
                                        "title": "\"before all\" hook",
                                        "parent": "Login",
                                        "currentTest": None,
                                    },
                                },
                                "tests": {
                                    "Pass(\"shows dashboard\")4": {
                                        "title": "Pass(\"shows dashboard\")",
                                        "state": "pass",
                                        "duration": 5,
                                    },
                                    "fails5": {
                                        "title": "fails",
                                        "state": "fail",
                                        "error": {"type": "AssertionError", "message": "nope", "stack": "at 1"},
                                    },
                                },
                            },
                        },
                    },
                },
            },
        },
    },
}


def test_parse_host_stats_layout():
    result = parse_run_result(HOST_STATS)

    assert result.start == "2024-01-01T10:00:00Z"
    runner = result.runners[0]
    assert runner.runner_id == "0-0"
    assert runner.config.wait_for_timeout == 1000
    assert runner.config.framework_options == {"timeout": 2000}

    spec = runner.specs[0]
    assert spec.canonical_file == "/repo/build/features/login.feature"
    assert spec.property_names == ["files", "suites"]

    suite = spec.suites[0]
    assert suite.title == "Login"
    assert suite.duration == 12
    assert suite.property_names == ["title", "_duration", "start", "end", "hooks", "tests"]
    assert suite.hooks[0].parent == "Login"
    assert [t.title for t in suite.tests] == ['Pass("shows dashboard")', "fails"]
    assert suite.tests[1].error.type == "AssertionError"
    assert suite.tests[1].error.stack == "at 1"


def test_load_json_file(tmp_path: Path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps(HOST_STATS))
    assert len(load_run_result(path).runners) == 1


def test_load_yaml_file(tmp_path: Path):
    path = tmp_path / "run.yaml"
    path.write_text(
        "\n".join([
            "start: 1",
            "end: 2",
            "runners:",
            "  r1:",
            "    specs:",
            "      s1:",
            "        files: [/repo/build/a.feature]",
            "        suites:",
            "          A:",
            "            title: A",
            "            tests:",
            "              t1: {title: one, state: pending}",
            "",
        ])
    )
    result = load_run_result(path)
    assert result.runners[0].specs[0].suites[0].tests[0].state == "pending"


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(PathNotFoundError):
        load_run_result(tmp_path / "missing.json")


def test_invalid_json_raises(tmp_path: Path):
    path = tmp_path / "run.json"
    path.write_text("{not json")
    with pytest.raises(MalformedResultError):
        load_run_result(path)


def test_non_mapping_suites_raise():
    with pytest.raises(MalformedResultError):
        parse_run_result({"runners": {"r": {"specs": {"s": {"suites": ["not", "a", "mapping"]}}}}})


def test_missing_optional_sections_are_tolerated():
    result = parse_run_result({"runners": {"r": {}}})
    assert result.runners[0].specs == []
    assert result.runners[0].config.host is None


def test_both_wait_timeout_spellings_are_read():
    lower = parse_run_result({"runners": {"r": {"config": {"waitforTimeout": 500}}}})
    camel = parse_run_result({"runners": {"r": {"config": {"waitForTimeout": 700}}}})
    assert lower.runners[0].config.wait_for_timeout == 500
    assert camel.runners[0].config.wait_for_timeout == 700


def test_null_title_falls_back_to_the_key_name():
    result = parse_run_result({"runners": {"r": {"specs": {"s": {"suites": {
        "Suite1": {
            "title": None,
            "hooks": {"hook2": {"title": None}},
            "tests": {"step3": {"title": None, "state": "pass"}},
        },
    }}}}}})

    suite = result.runners[0].specs[0].suites[0]
    assert suite.title == "Suite1"
    assert suite.hooks[0].title == "hook2"
    assert suite.tests[0].title == "step3"


def test_non_string_titles_are_stringified():
    result = parse_run_result({"runners": {"r": {"specs": {"s": {"suites": {
        "Suite1": {"title": 7, "tests": {"t": {"title": 123, "state": "pass"}}},
    }}}}}})

    suite = result.runners[0].specs[0].suites[0]
    assert suite.title == "7"
    assert suite.tests[0].title == "123"


def test_undecodable_file_raises_malformed(tmp_path: Path):
    path = tmp_path / "run.json"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(MalformedResultError):
        load_run_result(path)
