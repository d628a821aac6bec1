"""
Classification of test titles.

Two title prefixes change how a test shows up in the generated
documentation:

- ``Screenshot("name")`` marks a captured image rather than a step. The
  text between the first pair of double quotes names the image.
- ``NoDoc(...)`` keeps a test out of the documentation. It is still
  counted in the result totals.
"""

from dataclasses import dataclass
from enum import Enum

from doc_reporter.core.logging import get_logger

SCREENSHOT_PREFIX = "Screenshot"
NO_DOC_PREFIX = "NoDoc"

logger = get_logger(__name__)


class TitleKind(Enum):
    NORMAL = "normal"
    SCREENSHOT = "screenshot"
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class TitleClass:
    kind: TitleKind
    title: str
    captured_name: str = ""

    @property
    def is_screenshot(self) -> bool:
        return self.kind is TitleKind.SCREENSHOT

    @property
    def is_excluded(self) -> bool:
        return self.kind is TitleKind.EXCLUDED


def captured_name(title: str) -> str:
    """Text between the first pair of double quotes, or '' if there is none."""
    parts = title.split('"')
    if len(parts) < 2:
        return ""
    return parts[1]


def classify_title(title: str) -> TitleClass:
    """Tag a test title as a normal step, a screenshot or excluded from docs."""
    if title.startswith(SCREENSHOT_PREFIX):
        name = captured_name(title)
        if not name:
            logger.warning(f"Screenshot test has no quoted name: {title!r}")
        return TitleClass(TitleKind.SCREENSHOT, title, name)
    if title.startswith(NO_DOC_PREFIX):
        return TitleClass(TitleKind.EXCLUDED, title)
    return TitleClass(TitleKind.NORMAL, title)
