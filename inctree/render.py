"""Renderers turning TreeEvent streams into text, styled text or JSON."""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel, Field
from rich.text import Text

from inctree.cache import DependencyCache
from inctree.console import Console
from inctree.models import IncludeTree, NodeStatus, TreeEvent

INDENT = "  "
SEPARATOR = ":" * 80

STATUS_SUFFIXES = {
    NodeStatus.NORMAL: "",
    NodeStatus.EXTERNAL: " (Ext)",
    NodeStatus.MISSING: " (!)",
    NodeStatus.CIRCULAR: " (C)",
}

STATUS_STYLES = {
    NodeStatus.NORMAL: "bold",
    NodeStatus.EXTERNAL: "cyan",
    NodeStatus.MISSING: "red",
    NodeStatus.CIRCULAR: "yellow",
}

EntryTrees = Iterable[tuple[Path, Iterable[TreeEvent]]]


def format_event(event: TreeEvent) -> str:
    return f"{INDENT * event.depth}{event.label}{STATUS_SUFFIXES[event.status]}"


def render_text(trees: EntryTrees, stream: TextIO) -> None:
    """Write each tree as indented lines, preceded by a separator line."""
    for _, events in trees:
        stream.write(SEPARATOR + "\n")
        for event in events:
            stream.write(format_event(event) + "\n")


def render_rich(trees: EntryTrees, console: Console) -> None:
    """Same layout as render_text, styled per status."""
    for _, events in trees:
        console.print(Text(SEPARATOR, style="dim"))
        for event in events:
            line = Text(INDENT * event.depth)
            line.append(event.label, style=STATUS_STYLES[event.status])
            suffix = STATUS_SUFFIXES[event.status]
            if suffix:
                line.append(suffix, style=STATUS_STYLES[event.status])
            console.print(line)


def build_tree(events: Iterable[TreeEvent]) -> list[IncludeTree]:
    """Rebuild nested trees from a pre-order event stream."""
    roots: list[IncludeTree] = []
    stack: list[IncludeTree] = []

    for event in events:
        node = IncludeTree(label=event.label, status=event.status)
        # Pop back to this node's parent.
        del stack[event.depth :]
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots


def render_json(trees: EntryTrees, stream: TextIO) -> None:
    """Write a JSON array with one `{entry, tree}` object per entry point."""
    payload = []
    for entry_point, events in trees:
        for tree in build_tree(events):
            payload.append(
                {"entry": Path(entry_point).as_posix(), "tree": tree.model_dump(mode="json")}
            )
    stream.write(json.dumps(payload, indent=2) + "\n")


class RunSummary(BaseModel):
    """Counts collected over a whole run."""

    entry_points: int = 0
    events: dict[NodeStatus, int] = Field(default_factory=dict)
    cached_records: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    unreadable_files: int = 0

    def track(self, trees: EntryTrees) -> Iterator[tuple[Path, Iterator[TreeEvent]]]:
        """Pass trees through unchanged while counting entry points and events."""

        def count(events: Iterable[TreeEvent]) -> Iterator[TreeEvent]:
            for event in events:
                self.events[event.status] = self.events.get(event.status, 0) + 1
                yield event

        for entry_point, events in trees:
            self.entry_points += 1
            yield entry_point, count(events)

    def update_from_cache(self, cache: DependencyCache) -> None:
        self.cached_records = len(cache)
        self.cache_hits = cache.hits
        self.cache_misses = cache.misses

    def lines(self) -> list[str]:
        lines = [f"Entry points: {self.entry_points}"]
        for status in NodeStatus:
            lines.append(f"{status.value.capitalize()} nodes: {self.events.get(status, 0)}")
        lines.append(f"Cached records: {self.cached_records}")
        lines.append(f"Cache hits: {self.cache_hits}, misses: {self.cache_misses}")
        lines.append(f"Unreadable files: {self.unreadable_files}")
        return lines
