#!/usr/bin/env python3

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from inctree.config import CONFIG_FILENAME, AnalyzerConfig


def test_defaults():
    config = AnalyzerConfig()

    assert config.root_dir == Path(".")
    assert config.implementation_extensions == [".cpp", ".cxx", ".cc", ".c"]
    assert config.entry_marker == "int main("
    assert config.exclude_dirs == []


def test_extensions_are_normalized():
    config = AnalyzerConfig(implementation_extensions=["cpp", ".c", " cc ", "cpp", ""])

    assert config.implementation_extensions == [".cpp", ".c", ".cc"]


def test_empty_extensions_rejected():
    with pytest.raises(ValidationError):
        AnalyzerConfig(implementation_extensions=[])


@pytest.mark.parametrize("ext", ["c/x", "sub\\cpp", ".", "/c"])
def test_extensions_that_are_not_suffixes_rejected(ext):
    with pytest.raises(ValidationError):
        AnalyzerConfig(implementation_extensions=[".cpp", ext])


def test_empty_marker_rejected():
    with pytest.raises(ValidationError):
        AnalyzerConfig(entry_marker="")


def test_load_from_file_defaults_root_to_file_directory(tmp_path: Path):
    config_path = tmp_path / CONFIG_FILENAME
    config_path.write_text(json.dumps({"entry_marker": "void app_main("}))

    config = AnalyzerConfig.load_from_file(config_path)

    assert config.root_dir == tmp_path
    assert config.entry_marker == "void app_main("


def test_load_from_file_relative_root(tmp_path: Path):
    config_path = tmp_path / CONFIG_FILENAME
    config_path.write_text(json.dumps({"root_dir": "src"}))

    config = AnalyzerConfig.load_from_file(config_path)

    assert config.root_dir == tmp_path / "src"


def test_save_then_load(tmp_path: Path):
    config_path = tmp_path / CONFIG_FILENAME
    AnalyzerConfig(implementation_extensions=[".c"], exclude_dirs=["build"]).save_to_file(
        config_path
    )

    assert "root_dir" not in json.loads(config_path.read_text())
    loaded = AnalyzerConfig.load_from_file(config_path)
    assert loaded.implementation_extensions == [".c"]
    assert loaded.exclude_dirs == ["build"]


def test_find_project_config_searches_parents(tmp_path: Path):
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"exclude_dirs": ["third_party"]}))
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    config = AnalyzerConfig.find_project_config(nested)

    assert config is not None
    assert config.exclude_dirs == ["third_party"]


def test_find_project_config_none(tmp_path: Path):
    assert AnalyzerConfig.find_project_config(tmp_path) is None
