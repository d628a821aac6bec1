"""
Doc Reporter Package

Turns finished test runs into published documentation: a JSON result
document and a Markdown narrative per runner, with captured screenshots.
"""

__version__ = "0.1.0"
__author__ = "Helia-Core Team"

from doc_reporter.core.config import Config
from doc_reporter.reporting.reporter import DocReporter

__all__ = [
    "Config",
    "DocReporter",
]
