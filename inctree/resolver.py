"""Resolution of include tokens to files, and implementation companions of headers."""

import os
from collections.abc import Sequence
from pathlib import Path

from inctree.models import (
    ExternalInclude,
    IncludeToken,
    LocalInclude,
    MissingInclude,
    Resolution,
)

DEFAULT_IMPLEMENTATION_EXTENSIONS = (".cpp", ".cxx", ".cc", ".c")


def canonical_path(path: str | Path) -> str:
    """
    Get the identity key for a path.

    Args:
        path: Absolute path, or path relative to the working directory.

    Returns:
        The normalized path relative to the working directory, with `/`
        separators. Falls back to the absolute path when no relative form
        exists (e.g. another drive on Windows).
    """
    normalized = os.path.normpath(path)
    try:
        relative = os.path.relpath(normalized)
    except ValueError:
        relative = os.path.abspath(normalized)
    return Path(relative).as_posix()


def resolve_include(
    token: IncludeToken,
    containing_dir: str | Path,
    root_dir: str | Path,
) -> Resolution:
    """
    Resolve one include token.

    Local includes are looked up next to the including file first, then in
    the root directory. External includes never touch the filesystem.

    Args:
        token: The include directive argument.
        containing_dir: Directory of the file holding the directive.
        root_dir: Root directory of the whole run.

    Returns:
        ExternalInclude, LocalInclude, or MissingInclude labelled with the
        root directory attempt.
    """
    if token.is_external:
        return ExternalInclude(name=token.name)

    candidate = Path(containing_dir) / token.name
    if candidate.is_file():
        return LocalInclude(path=canonical_path(candidate))

    candidate = Path(root_dir) / token.name
    if candidate.is_file():
        return LocalInclude(path=canonical_path(candidate))

    return MissingInclude(path=canonical_path(candidate))


def is_implementation_file(
    path: str | Path,
    extensions: Sequence[str] = DEFAULT_IMPLEMENTATION_EXTENSIONS,
) -> bool:
    return Path(path).suffix in extensions


def find_companion(
    header: str,
    including: str,
    extensions: Sequence[str] = DEFAULT_IMPLEMENTATION_EXTENSIONS,
) -> str | None:
    """Find the implementation file sitting next to `header`, if it has one.

    Returns None when `header` is itself an implementation file, or when it is
    the own header of `including` (an implementation file with the same path
    minus extension). Otherwise the first existing sibling, trying
    `extensions` in order, is returned as a canonical path.
    """
    header_path = Path(header)
    if is_implementation_file(header_path, extensions):
        return None

    including_path = Path(including)
    if (
        is_implementation_file(including_path, extensions)
        and header_path.with_suffix("") == including_path.with_suffix("")
    ):
        return None

    for ext in extensions:
        candidate = header_path.with_suffix(ext)
        if candidate.is_file():
            return canonical_path(candidate)

    return None
