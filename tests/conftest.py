from pathlib import Path

import pytest


@pytest.fixture
def temp_project(tmp_path, monkeypatch):
    """Create an empty project directory and make it the working directory."""
    project_root = tmp_path.resolve()
    monkeypatch.chdir(project_root)
    return project_root


@pytest.fixture
def write_files(temp_project):
    """Write `{relative_path: content}` into the temporary project."""

    def write(files: dict[str, str]) -> Path:
        for name, content in files.items():
            file_path = temp_project / name
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
        return temp_project

    return write
