"""Regex based extraction of include directives from C and C++ sources."""

import re
from pathlib import Path

from inctree.models import IncludeToken

# Heuristic only: comments, macros and conditional compilation are not understood.
INCLUDE_RE = re.compile(r'#include[ \t]*[<"]([^\n]+?)([>"])')


class ReadFailure(Exception):
    """Raised when a source file exists but cannot be read."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Error accessing file {self.path}: {reason}")


def read_source(path: str | Path) -> str:
    """Read a source file, raising ReadFailure on any I/O error."""
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise ReadFailure(path, e.strerror or str(e)) from e


def extract_includes(text: str) -> list[IncludeToken]:
    """Return the include directives of `text` in the order they appear.

    Delimiters are stripped from each name. A directive closed by `>` is an
    external include, one closed by `"` is a local include. Repeated
    directives are kept.
    """
    if not isinstance(text, str):
        return []

    return [
        IncludeToken(name=match.group(1), is_external=match.group(2) == ">")
        for match in INCLUDE_RE.finditer(text)
    ]
