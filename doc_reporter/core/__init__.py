"""
Core modules for Doc Reporter.
"""

from doc_reporter.core.config import Config
from doc_reporter.core.errors import (
    DocReporterError,
    ConfigurationError,
    PathNotFoundError,
    MalformedResultError,
    ReportWriteError,
)

__all__ = [
    "Config",
    "DocReporterError",
    "ConfigurationError",
    "PathNotFoundError",
    "MalformedResultError",
    "ReportWriteError",
]
