#!/usr/bin/env python3
"""
Test cases for entry point discovery and the per-entry-point driver.
"""

from pathlib import Path

from inctree.config import AnalyzerConfig
from inctree.discovery import (
    analyze,
    contains_entry_point,
    find_entry_points,
    iter_source_files,
)
from inctree.models import NodeStatus
from inctree.traversal import IncludeTraversal


def test_iter_source_files_sorted_and_filtered(write_files):
    write_files(
        {
            "b.cpp": "",
            "a.c": "",
            "a.h": "",
            "notes.txt": "",
            "src/z.cc": "",
            "src/inner/y.cxx": "",
        }
    )

    files = [p.as_posix() for p in iter_source_files(Path("."), [".cpp", ".cxx", ".cc", ".c"])]

    assert files == ["a.c", "b.cpp", "src/z.cc", "src/inner/y.cxx"]


def test_iter_source_files_excludes_directories(write_files):
    write_files({"main.c": "", "build/gen.c": "", "src/build/deep.c": "", "src/ok.c": ""})

    files = [p.name for p in iter_source_files(Path("."), [".c"], exclude_dirs=["build"])]

    assert files == ["main.c", "ok.c"]


def test_contains_entry_point(write_files):
    write_files({"main.cpp": "int main(int argc, char** argv) {}\n", "lib.cpp": "int helper();\n"})

    assert contains_entry_point(Path("main.cpp"), "int main(")
    assert not contains_entry_point(Path("lib.cpp"), "int main(")
    assert not contains_entry_point(Path("gone.cpp"), "int main(")


def test_find_entry_points_uses_config(write_files):
    write_files(
        {
            "app/main.cpp": "int main() {}\n",
            "fw/app.c": "void app_main(void) {}\n",
            "lib/util.cpp": "",
            "main.h": "int main() {}\n",
        }
    )

    default = [p.as_posix() for p in find_entry_points(AnalyzerConfig())]
    firmware = AnalyzerConfig(entry_marker="app_main(", implementation_extensions=[".c"])
    custom = [p.as_posix() for p in find_entry_points(firmware)]

    assert default == ["app/main.cpp"]
    assert custom == ["fw/app.c"]


def test_analyze_one_tree_per_entry_point(write_files):
    write_files(
        {
            "one.cpp": '#include "shared.h"\nint main() {}\n',
            "two.cpp": '#include "shared.h"\nint main() {}\n',
            "shared.h": "#include <vector>\n",
        }
    )
    config = AnalyzerConfig()
    traversal = IncludeTraversal(config.root_dir)

    trees = [(entry.as_posix(), list(events)) for entry, events in analyze(config, traversal)]

    assert [entry for entry, _ in trees] == ["one.cpp", "two.cpp"]
    assert [e.label for e in trees[0][1]] == ["one.cpp", "shared.h", "vector"]
    assert [e.label for e in trees[1][1]] == ["two.cpp", "shared.h", "vector"]
    assert trees[1][1][1].status == NodeStatus.NORMAL
    # shared.h was expanded once and replayed for the second tree
    assert traversal.cache.hits >= 2


def test_analyze_labels_relative_to_working_directory(write_files):
    write_files(
        {
            "proj/main.cpp": '#include "util.h"\nint main() {}\n',
            "proj/util.h": "",
        }
    )

    trees = [list(events) for _, events in analyze(AnalyzerConfig(root_dir=Path("proj")))]

    assert [e.label for e in trees[0]] == ["proj/main.cpp", "proj/util.h"]


def test_analyze_without_entry_points(write_files):
    write_files({"lib.cpp": "int f() { return 0; }\n"})

    assert list(analyze(AnalyzerConfig())) == []
