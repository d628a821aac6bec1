"""
Transform a runner's result tree into report documents.

Both builders walk specs, suites and tests in the order the host
recorded them and apply the same title classification, so the JSON
document and the Markdown narrative always describe the same steps.
No I/O happens here.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from doc_reporter.core.logging import get_logger
from doc_reporter.reporting.models import (
    DocumentState,
    HookDocument,
    HookResult,
    NarrativeDocument,
    OutcomeState,
    ResultDocument,
    RunnerInfo,
    StateCounts,
    SuiteDocument,
    SuiteResult,
    TestCaseDocument,
    TestResult,
)
from doc_reporter.reporting.paths import DEFAULT_BUILD_SEGMENT, screenshot_document_name
from doc_reporter.reporting.titles import TitleClass, classify_title

logger = get_logger(__name__)


@dataclass
class _Tally:
    """Accumulator threaded through one runner's traversal."""
    counts: StateCounts = field(default_factory=StateCounts)
    file: Optional[str] = None
    keys: List[str] = field(default_factory=list)

    def count(self, state: Any) -> None:
        if state == OutcomeState.PENDING.value:
            self.counts.skipped += 1
        elif state == OutcomeState.PASS.value:
            self.counts.passed += 1
        elif state == OutcomeState.FAIL.value:
            self.counts.failed += 1


def normalize_state(state: Any) -> Any:
    """pending -> skipped, pass/fail unchanged, anything else passed through."""
    if state == OutcomeState.PENDING.value:
        return DocumentState.SKIPPED.value
    if state == OutcomeState.PASS.value:
        return DocumentState.PASS.value
    if state == OutcomeState.FAIL.value:
        return DocumentState.FAIL.value
    return state


def build_hook_document(hook: HookResult) -> HookDocument:
    return HookDocument(
        start=hook.start,
        end=hook.end,
        duration=hook.duration,
        title=hook.title,
        associated_suite=hook.parent,
        associated_test=hook.current_test,
    )


def build_test_document(
    test: TestResult,
    spec_file: Optional[str],
    build_segment: str = DEFAULT_BUILD_SEGMENT,
    title_class: Optional[TitleClass] = None,
) -> TestCaseDocument:
    """Document entry for a test; screenshot titles become relative image paths."""
    if title_class is None:
        title_class = classify_title(test.title)
    if title_class.is_screenshot:
        name = screenshot_document_name(spec_file or "", title_class.captured_name, build_segment)
    else:
        name = test.title

    document = TestCaseDocument(
        name=name,
        start=test.start,
        end=test.end,
        duration=test.duration,
        state=normalize_state(test.state),
    )

    # Only sub-fields that carry a value are copied
    if test.error is not None:
        if test.error.type:
            document.error_kind = test.error.type
        if test.error.message:
            document.error_message = test.error.message
        if test.error.stack:
            document.error_stack = test.error.stack

    return document


def _build_suite_document(
    suite: SuiteResult,
    tally: _Tally,
    build_segment: str,
) -> SuiteDocument:
    suite_document = SuiteDocument(
        name=suite.title,
        description=list(suite.property_names),
        duration=suite.duration,
        start=suite.start,
        end=suite.end,
    )

    for hook in suite.hooks:
        suite_document.hooks.append(build_hook_document(hook))

    for test in suite.tests:
        tally.count(test.state)
        title_class = classify_title(test.title)
        if title_class.is_excluded:
            continue
        suite_document.tests.append(
            build_test_document(test, tally.file, build_segment, title_class)
        )

    return suite_document


def build_result_document(
    start: Any,
    end: Any,
    runner_info: RunnerInfo,
    build_segment: str = DEFAULT_BUILD_SEGMENT,
) -> ResultDocument:
    """
    Build the JSON result document of one runner.

    Counts cover every test of every spec, including tests left out of
    the document by a ``NoDoc`` title. ``file`` and ``keys`` describe
    the last spec only: each spec overwrites them, so a runner with
    several specs publishes all suites under the last spec's path.

    Args:
        start: Run start timestamp
        end: Run end timestamp
        runner_info: Runner result tree
        build_segment: Build tree marker used for screenshot folders

    Returns:
        ResultDocument for the runner
    """
    config = runner_info.config
    document = ResultDocument(
        start=start,
        end=end,
        capabilities=runner_info.capabilities,
        host=config.host,
        port=config.port,
        base_url=config.base_url,
        wait_for_timeout=config.wait_for_timeout,
        framework=config.framework,
        framework_options=config.framework_options,
    )

    if len(runner_info.specs) > 1:
        logger.warning(
            f"Runner {runner_info.runner_id or '?'} has {len(runner_info.specs)} specs; "
            f"its report is published under the last spec's file only"
        )

    tally = _Tally()
    for spec in runner_info.specs:
        tally.file = spec.canonical_file
        tally.keys = list(spec.property_names)
        for suite in spec.suites:
            document.suites.append(_build_suite_document(suite, tally, build_segment))

    document.file = tally.file
    document.keys = tally.keys
    document.state = tally.counts
    return document


def build_narrative_document(runner_info: RunnerInfo) -> NarrativeDocument:
    """
    Build the Markdown narrative of one runner.

    One heading per suite, then a numbered line per ordinary test and an
    image line per screenshot. ``NoDoc`` tests are left out. Numbering
    restarts for each suite and skips screenshots.
    """
    narrative = NarrativeDocument()
    for spec in runner_info.specs:
        for suite in spec.suites:
            narrative.add_heading(suite.title)
            step = 0
            for test in suite.tests:
                title_class = classify_title(test.title)
                if title_class.is_screenshot:
                    narrative.add_image(title_class.captured_name)
                elif title_class.is_excluded:
                    continue
                else:
                    step += 1
                    narrative.add_step(step, test.title)
    return narrative
