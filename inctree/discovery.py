"""Entry point discovery and the per-entry-point driver."""

import logging
import os
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from inctree.cache import DependencyCache
from inctree.config import AnalyzerConfig
from inctree.extractor import ReadFailure, read_source
from inctree.models import TreeEvent
from inctree.resolver import is_implementation_file
from inctree.traversal import IncludeTraversal

logger = logging.getLogger(__name__)


def iter_source_files(
    root_dir: Path,
    extensions: Sequence[str],
    exclude_dirs: Iterable[str] = (),
) -> Iterator[Path]:
    """
    Walk `root_dir` and yield implementation files in a stable order.

    Args:
        root_dir: Directory to scan.
        extensions: Suffixes that mark implementation files.
        exclude_dirs: Directory names that are not descended into.

    Yields:
        Paths joined onto `root_dir`, directories and files visited in sorted order.
    """
    excluded = set(exclude_dirs)
    for current, dirs, files in os.walk(root_dir):
        dirs[:] = sorted(d for d in dirs if d not in excluded)
        for name in sorted(files):
            file_path = Path(current) / name
            if is_implementation_file(file_path, extensions) and file_path.is_file():
                yield file_path


def contains_entry_point(file_path: Path, marker: str) -> bool:
    """Check whether a source file contains the entry point marker."""
    try:
        return marker in read_source(file_path)
    except ReadFailure as e:
        logger.warning(str(e))
        return False


def find_entry_points(config: AnalyzerConfig) -> Iterator[Path]:
    for file_path in iter_source_files(
        config.root_dir, config.implementation_extensions, config.exclude_dirs
    ):
        if contains_entry_point(file_path, config.entry_marker):
            yield file_path


def analyze(
    config: AnalyzerConfig,
    traversal: IncludeTraversal | None = None,
) -> Iterator[tuple[Path, Iterator[TreeEvent]]]:
    """Yield `(entry_point, events)` for every entry point under the root directory.

    All trees share the traversal's cache. Each event stream should be
    consumed before advancing to the next entry point.
    """
    if traversal is None:
        traversal = IncludeTraversal(
            config.root_dir,
            cache=DependencyCache(),
            implementation_extensions=config.implementation_extensions,
        )

    for entry_point in find_entry_points(config):
        logger.info(f"Walking includes of {entry_point}")
        yield entry_point, traversal.walk(entry_point)
