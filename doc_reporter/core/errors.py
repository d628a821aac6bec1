"""
Custom exceptions for Doc Reporter.
"""


class DocReporterError(Exception):
    """Base exception for all Doc Reporter errors."""
    pass


class ConfigurationError(DocReporterError):
    """Raised when configuration is invalid."""
    pass


class PathNotFoundError(DocReporterError):
    """Raised when a required path does not exist."""
    pass


class MalformedResultError(DocReporterError):
    """Raised when a run result payload does not have the expected shape."""
    pass


class ReportWriteError(DocReporterError):
    """Raised when a report or screenshot cannot be written or moved."""

    def __init__(self, message: str, output_dir=None):
        super().__init__(message)
        self.output_dir = output_dir
