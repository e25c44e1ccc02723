#!/usr/bin/env python3

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from inctree.resolver import DEFAULT_IMPLEMENTATION_EXTENSIONS

CONFIG_FILENAME = "inctree.json"


class AnalyzerConfig(BaseModel):
    """Configuration for an include tree run."""

    # Directory scanned for entry points, also the fallback include location
    root_dir: Path = Path(".")

    # Source files; order decides which companion wins for a header
    implementation_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IMPLEMENTATION_EXTENSIONS)
    )

    # A source file is an entry point if its text contains this marker
    entry_marker: str = "int main("

    # Directory names skipped while looking for entry points
    exclude_dirs: list[str] = Field(default_factory=list)

    @field_validator("implementation_extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        extensions = []
        for ext in value:
            ext = ext.strip()
            if not ext:
                continue
            if "/" in ext or "\\" in ext:
                raise ValueError(f"extension must not contain a path separator: {ext!r}")
            if not ext.startswith("."):
                ext = "." + ext
            if ext == ".":
                raise ValueError("extension must have a name after the dot")
            if ext not in extensions:
                extensions.append(ext)
        if not extensions:
            raise ValueError("at least one implementation extension is required")
        return extensions

    @field_validator("entry_marker")
    @classmethod
    def _check_marker(cls, value: str) -> str:
        if not value:
            raise ValueError("entry marker must not be empty")
        return value

    @classmethod
    def load_from_file(cls, config_path: Path) -> "AnalyzerConfig":
        """Load configuration from a JSON file.

        A relative `root_dir` in the file is taken relative to the file's directory.
        """
        args = json.loads(config_path.read_text(encoding="utf-8"))
        if "root_dir" in args:
            args["root_dir"] = config_path.parent / args["root_dir"]
        else:
            args["root_dir"] = config_path.parent
        return cls.model_validate(args)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a JSON file."""
        # root_dir is derived from the file location on load
        data = self.model_dump(exclude={"root_dir"})
        config_path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    @classmethod
    def find_project_config(cls, start_path: Path) -> Optional["AnalyzerConfig"]:
        """Find configuration by searching up the directory tree."""
        current = start_path.resolve()
        while True:
            config_file = current / CONFIG_FILENAME
            if config_file.is_file():
                return cls.load_from_file(config_file)
            if current == current.parent:
                return None
            current = current.parent
