"""
Documentation reporting for finished test runs.

This module turns a host's run result tree into:
- a JSON result document per runner
- a Markdown narrative per runner
- relocated screenshots next to both
"""

from doc_reporter.reporting.models import (
    RunResult,
    RunnerInfo,
    RunnerConfig,
    SpecResult,
    SuiteResult,
    HookResult,
    TestResult,
    TestError,
    ResultDocument,
    SuiteDocument,
    TestCaseDocument,
    HookDocument,
    NarrativeDocument,
    StateCounts,
)
from doc_reporter.reporting.titles import TitleKind, TitleClass, classify_title
from doc_reporter.reporting.transformer import build_result_document, build_narrative_document
from doc_reporter.reporting.writer import ReportWriter, PersistResult, PersistStatus
from doc_reporter.reporting.parser import load_run_result, parse_run_result
from doc_reporter.reporting.reporter import DocReporter

__all__ = [
    "RunResult",
    "RunnerInfo",
    "RunnerConfig",
    "SpecResult",
    "SuiteResult",
    "HookResult",
    "TestResult",
    "TestError",
    "ResultDocument",
    "SuiteDocument",
    "TestCaseDocument",
    "HookDocument",
    "NarrativeDocument",
    "StateCounts",
    "TitleKind",
    "TitleClass",
    "classify_title",
    "build_result_document",
    "build_narrative_document",
    "ReportWriter",
    "PersistResult",
    "PersistStatus",
    "load_run_result",
    "parse_run_result",
    "DocReporter",
]
