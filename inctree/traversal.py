"""
Depth-first walk over the include graph of a source file.

The walk emits TreeEvents lazily in pre-order. Results for each file are
memoized in a DependencyCache, so a file reached again (from the same entry
point or a later one) is replayed from its record instead of being re-read.
Cycles are detected against the ancestors of the current node only.

External includes are cached under their bare name, in the same key space as
canonical paths. Once `<config.h>` has been seen, a quoted include resolving
to a local `config.h` at the working directory is replayed as external and
its subtree is not shown. Known limitation of the shared key space.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from inctree.cache import DependencyCache
from inctree.extractor import ReadFailure, extract_includes, read_source
from inctree.models import (
    DependencyRecord,
    Diagnostic,
    LocalInclude,
    NodeStatus,
    TreeEvent,
)
from inctree.resolver import (
    DEFAULT_IMPLEMENTATION_EXTENSIONS,
    canonical_path,
    find_companion,
    resolve_include,
)

logger = logging.getLogger(__name__)


class PathInterner:
    """Maps canonical paths to small integer ids."""

    def __init__(self):
        self._ids: dict[str, int] = {}

    def intern(self, path: str) -> int:
        path_id = self._ids.get(path)
        if path_id is None:
            path_id = len(self._ids)
            self._ids[path] = path_id
        return path_id

    def __len__(self) -> int:
        return len(self._ids)


class Ancestry:
    """Immutable chain of path ids from the traversal root down to a node.

    Extending shares the parent chain, so each call frame owns its own view
    without copying and siblings never see each other's entries.
    """

    __slots__ = ("path_id", "parent", "depth")

    def __init__(self, path_id: int, parent: "Ancestry | None" = None):
        self.path_id = path_id
        self.parent = parent
        self.depth = 1 if parent is None else parent.depth + 1

    def __contains__(self, path_id: int) -> bool:
        node: Ancestry | None = self
        while node is not None:
            if node.path_id == path_id:
                return True
            node = node.parent
        return False

    def __len__(self) -> int:
        return self.depth


class IncludeTraversal:
    """Produces include trees for source files, sharing one cache between walks."""

    def __init__(
        self,
        root_dir: str | Path,
        cache: DependencyCache | None = None,
        implementation_extensions: Sequence[str] = DEFAULT_IMPLEMENTATION_EXTENSIONS,
    ):
        self.root_dir = Path(root_dir)
        self.cache = cache if cache is not None else DependencyCache()
        self.implementation_extensions = tuple(implementation_extensions)
        self.diagnostics: list[Diagnostic] = []
        self._interner = PathInterner()

    def walk(self, start: str | Path) -> Iterator[TreeEvent]:
        """Yield the include tree of `start` in depth-first pre-order.

        Uses an explicit stack of frames, so include chains and cycles of any
        length are walked without growing the interpreter stack.
        """
        stack: list[_Frame] = []
        yield self._enter(canonical_path(start), None, 0, stack)

        while stack:
            frame = stack[-1]
            step = next(frame.steps, None)

            if step is None:
                stack.pop()
                # A file is cached only once its whole subtree has been walked.
                if frame.children is not None:
                    self.cache.insert_if_absent(
                        frame.path,
                        DependencyRecord(status=NodeStatus.NORMAL, children=tuple(frame.children)),
                    )
                continue

            if isinstance(step, TreeEvent):
                yield step
            else:
                yield self._enter(step, frame.branch, frame.depth + 1, stack)

    def _enter(
        self, path: str, ancestry: Ancestry | None, depth: int, stack: list["_Frame"]
    ) -> TreeEvent:
        """Emit the event for `path` and push a frame if it has children to walk."""
        path_id = self._interner.intern(path)

        if ancestry is not None and path_id in ancestry:
            return TreeEvent(depth=depth, label=path, status=NodeStatus.CIRCULAR)

        branch = Ancestry(path_id, ancestry)
        record = self.cache.lookup(path)
        if record is not None:
            logger.debug(f"Replaying {path} from cache")
            if record.status is NodeStatus.NORMAL and record.children:
                stack.append(_Frame(path, branch, depth, iter(record.children)))
            return TreeEvent(depth=depth, label=path, status=record.status)

        logger.debug(f"Expanding {path}")
        children: list[str] = []
        stack.append(
            _Frame(path, branch, depth, self._expand(path, depth, children), children)
        )
        return TreeEvent(depth=depth, label=path, status=NodeStatus.NORMAL)

    def _expand(
        self, path: str, depth: int, children: list[str]
    ) -> Iterator["TreeEvent | str"]:
        """Resolve the includes of `path`.

        Yields leaf events directly and the canonical paths still to be
        walked, recording every child in `children` in discovery order.
        """
        containing_dir = Path(path).parent

        for token in self._read_includes(path):
            outcome = resolve_include(token, containing_dir, self.root_dir)

            if not isinstance(outcome, LocalInclude):
                # Leaves are final as soon as they are resolved.
                self.cache.insert_if_absent(
                    outcome.label, DependencyRecord(status=outcome.status)
                )
                children.append(outcome.label)
                yield TreeEvent(depth=depth + 1, label=outcome.label, status=outcome.status)
                continue

            companion = find_companion(outcome.path, path, self.implementation_extensions)
            if companion is not None:
                children.append(companion)
                yield companion

            children.append(outcome.path)
            yield outcome.path

    def _read_includes(self, path: str):
        try:
            text = read_source(path)
        except ReadFailure as e:
            logger.warning(str(e))
            self.diagnostics.append(Diagnostic(path=path, message=e.reason))
            return []
        return extract_includes(text)


@dataclass
class _Frame:
    """A node whose children are being walked."""

    path: str
    branch: Ancestry
    depth: int
    # Leaf events and child paths still to visit
    steps: Iterator[TreeEvent | str]
    # Children discovered so far; None when replaying a cached record
    children: list[str] | None = None
