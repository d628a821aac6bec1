"""
Data models for documentation reporting.

Input models mirror the result tree the test host hands over once a run
is finished (runner -> spec -> suite -> hook/test). Output models are the
two report shapes written per runner: the JSON result document and the
Markdown narrative.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any


SUITE_PROPERTY_NAMES = ["title", "duration", "start", "end", "hooks", "tests"]
SPEC_PROPERTY_NAMES = ["files", "suites"]


class OutcomeState(str, Enum):
    """Test outcome states reported by the host."""
    PENDING = "pending"
    PASS = "pass"
    FAIL = "fail"


class DocumentState(str, Enum):
    """Normalized states written to the result document."""
    SKIPPED = "skipped"
    PASS = "pass"
    FAIL = "fail"


@dataclass
class TestError:
    """Error descriptor attached to a failed test."""
    __test__ = False

    type: Optional[str] = None
    message: Optional[str] = None
    stack: Optional[str] = None


@dataclass
class TestResult:
    """Individual test result."""
    __test__ = False

    title: str
    state: Any = None
    start: Any = None
    end: Any = None
    duration: Any = None
    error: Optional[TestError] = None
    name: Optional[str] = None  # key in the suite's test mapping

    def __post_init__(self):
        if self.name is None:
            self.name = self.title


@dataclass
class HookResult:
    """Setup/teardown hook result."""
    title: str
    start: Any = None
    end: Any = None
    duration: Any = None
    parent: Any = None  # owning suite, by name
    current_test: Any = None
    name: Optional[str] = None

    def __post_init__(self):
        if self.name is None:
            self.name = self.title


@dataclass
class SuiteResult:
    """Suite with its hooks and tests, in execution order."""
    title: str
    duration: Any = None
    start: Any = None
    end: Any = None
    hooks: List[HookResult] = field(default_factory=list)
    tests: List[TestResult] = field(default_factory=list)
    # Raw property names of the host's suite object, passed through as "description"
    property_names: List[str] = field(default_factory=lambda: list(SUITE_PROPERTY_NAMES))
    name: Optional[str] = None

    def __post_init__(self):
        if self.name is None:
            self.name = self.title


@dataclass
class SpecResult:
    """One specification file and its suites."""
    files: List[str] = field(default_factory=list)
    suites: List[SuiteResult] = field(default_factory=list)
    property_names: List[str] = field(default_factory=lambda: list(SPEC_PROPERTY_NAMES))
    spec_id: Optional[str] = None

    @property
    def canonical_file(self) -> Optional[str]:
        """First originating file, or None when the spec has none."""
        return self.files[0] if self.files else None


@dataclass
class RunnerConfig:
    """Connection configuration of a runner. Flattened into the result document."""
    host: Any = None
    port: Any = None
    base_url: Any = None
    wait_for_timeout: Any = None
    framework: Any = None
    framework_options: Any = None


@dataclass
class RunnerInfo:
    """One execution context (browser/environment instance) of a run."""
    capabilities: Any = None
    config: RunnerConfig = field(default_factory=RunnerConfig)
    specs: List[SpecResult] = field(default_factory=list)
    runner_id: Optional[str] = None


@dataclass
class RunResult:
    """Complete result tree of a finished run."""
    start: Any = None
    end: Any = None
    runners: List[RunnerInfo] = field(default_factory=list)


@dataclass
class HookDocument:
    """Hook entry of a suite document."""
    start: Any
    end: Any
    duration: Any
    title: str
    associated_suite: Any = None
    associated_test: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, excluding null fields."""
        return _drop_none({
            "start": self.start,
            "end": self.end,
            "duration": self.duration,
            "title": self.title,
            "associatedSuite": self.associated_suite,
            "associatedTest": self.associated_test,
        })


@dataclass
class TestCaseDocument:
    """Test entry of a suite document."""
    __test__ = False

    name: str
    start: Any
    end: Any
    duration: Any
    state: Any
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    error_stack: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, excluding null fields."""
        state = self.state.value if isinstance(self.state, Enum) else self.state
        return _drop_none({
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "duration": self.duration,
            "state": state,
            "errorKind": self.error_kind,
            "errorMessage": self.error_message,
            "errorStack": self.error_stack,
        })


@dataclass
class SuiteDocument:
    """Suite entry of the result document."""
    name: str
    description: List[str]
    duration: Any
    start: Any
    end: Any
    tests: List[TestCaseDocument] = field(default_factory=list)
    hooks: List[HookDocument] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, excluding null fields."""
        return _drop_none({
            "name": self.name,
            "description": list(self.description),
            "duration": self.duration,
            "start": self.start,
            "end": self.end,
            "tests": [t.to_dict() for t in self.tests],
            "hooks": [h.to_dict() for h in self.hooks],
        })


@dataclass
class StateCounts:
    """Aggregate outcome counts of a runner."""
    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    def to_dict(self) -> Dict[str, int]:
        return {
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
        }


@dataclass
class ResultDocument:
    """Machine-readable report of one runner."""
    start: Any = None
    end: Any = None
    capabilities: Any = None
    host: Any = None
    port: Any = None
    base_url: Any = None
    wait_for_timeout: Any = None
    framework: Any = None
    framework_options: Any = None
    file: Optional[str] = None
    keys: List[str] = field(default_factory=list)
    state: StateCounts = field(default_factory=StateCounts)
    suites: List[SuiteDocument] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, excluding null fields."""
        return _drop_none({
            "start": self.start,
            "end": self.end,
            "capabilities": self.capabilities,
            "host": self.host,
            "port": self.port,
            "baseUrl": self.base_url,
            "waitForTimeout": self.wait_for_timeout,
            "framework": self.framework,
            "mochaOpts": self.framework_options,
            "suites": [s.to_dict() for s in self.suites],
            "file": self.file,
            "keys": list(self.keys),
            "state": self.state.to_dict(),
        })


@dataclass
class NarrativeDocument:
    """Human-readable narrative of one runner, one line per entry."""
    lines: List[str] = field(default_factory=list)

    def add_heading(self, title: str) -> None:
        self.lines.append(f"## {title}")

    def add_step(self, number: int, title: str) -> None:
        self.lines.append(f"{number}. {title}")

    def add_image(self, name: str) -> None:
        self.lines.append(f"![{name}]({name}.png)")

    def render(self) -> str:
        """Markdown text, every line newline-terminated."""
        return "".join(f"{line}\n" for line in self.lines)


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}
