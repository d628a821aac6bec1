"""
Build path -> publish path translation.

Spec files live under a build tree (``.../build/...``); the reports for
them are published under ``.../publish/output/...`` with the spec
extension swapped for the report format.
"""

import posixpath
from typing import Tuple

from doc_reporter.core.logging import get_logger

DEFAULT_BUILD_SEGMENT = "/build/"
DEFAULT_PUBLISH_SEGMENT = "/publish/output/"
DEFAULT_SOURCE_EXTENSION = ".feature"

logger = get_logger(__name__)


def screenshot_folder(spec_file: str, build_segment: str = DEFAULT_BUILD_SEGMENT) -> str:
    """
    Directory of a spec file relative to the build tree.

    ``/repo/build/features/home.feature`` gives ``features``. Without a
    build segment in the directory the result is not meaningful; a
    warning is logged and the name is derived anyway.
    """
    directory = posixpath.dirname(spec_file)
    index = directory.find(build_segment)
    if index < 0:
        logger.warning(f"No '{build_segment}' segment in spec directory: {directory}")
    return directory[index + len(build_segment):]


def screenshot_document_name(spec_file: str, name: str, build_segment: str = DEFAULT_BUILD_SEGMENT) -> str:
    """Relative image path used as the test name of a screenshot entry."""
    return f"../output/{screenshot_folder(spec_file, build_segment)}/{name}.png"


def derive_report_path(
    spec_file: str,
    extension: str,
    build_segment: str = DEFAULT_BUILD_SEGMENT,
    publish_segment: str = DEFAULT_PUBLISH_SEGMENT,
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
) -> str:
    """
    Publish path of the report for a spec file.

    The first occurrence of the build segment is replaced and the source
    extension swapped for ``extension``. A file without the source
    extension gets ``extension`` appended.
    """
    if build_segment not in spec_file:
        logger.warning(f"No '{build_segment}' segment in spec file: {spec_file}")
    target = spec_file.replace(build_segment, publish_segment, 1)
    if source_extension and target.endswith(source_extension):
        return target[:-len(source_extension)] + extension
    return target + extension


def derive_report_paths(
    spec_file: str,
    build_segment: str = DEFAULT_BUILD_SEGMENT,
    publish_segment: str = DEFAULT_PUBLISH_SEGMENT,
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
) -> Tuple[str, str]:
    """JSON and Markdown publish paths for a spec file."""
    return (
        derive_report_path(spec_file, ".json", build_segment, publish_segment, source_extension),
        derive_report_path(spec_file, ".md", build_segment, publish_segment, source_extension),
    )
