#!/usr/bin/env python3

from typing import TextIO

from rich.console import Console as RichConsole


class Console:
    """Simple console wrapper focused on output."""

    def __init__(self, file: TextIO | None = None, color: bool = True, stderr: bool = False):
        self._rich = RichConsole(
            file=file,
            stderr=stderr,
            force_terminal=color,
            no_color=not color,
            highlight=False,
            soft_wrap=True,
        )

    @property
    def rich(self) -> RichConsole:
        return self._rich

    def print(self, *args, **kwargs):
        """Print using Rich console."""
        return self._rich.print(*args, **kwargs)
