"""
Entry point for running doc_reporter as a module.

Usage:
    python -m doc_reporter [command] [options]
"""

from doc_reporter.cli import main

if __name__ == "__main__":
    main()
