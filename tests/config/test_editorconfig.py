# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : test_editorconfig.py
#   file_relpath : tests/config/test_editorconfig.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Tests for `.editorconfig` support (`fmtopts.config.editorconfig`)."""

from __future__ import annotations

from pathlib import Path

import pytest

from fmtopts.config.editorconfig import (
    editorconfig_files,
    editorconfig_to_options,
    expand_braces,
    load_editorconfig,
    parse_editorconfig,
)


def test_expand_braces() -> None:
    assert expand_braces("*.{js,py}") == ["*.js", "*.py"]
    assert expand_braces("{a,b}/{c,d}") == ["a/c", "a/d", "b/c", "b/d"]
    assert expand_braces("*.txt") == ["*.txt"]
    assert expand_braces("file{1..3}.txt") == ["file1.txt", "file2.txt", "file3.txt"]
    assert expand_braces("v{2..1}.{a,b}") == ["v1.a", "v1.b", "v2.a", "v2.b"]


def test_parse_editorconfig() -> None:
    is_root, sections = parse_editorconfig(
        """
# comment
root = true

[*]
Indent_Style = Tab

[*.md]
max_line_length: 72
"""
    )

    assert is_root is True
    assert sections == [("*", {"indent_style": "tab"}), ("*.md", {"max_line_length": "72"})]


@pytest.mark.parametrize(
    "properties, expected",
    [
        ({"indent_style": "tab"}, {"use_tabs": True}),
        ({"indent_style": "space", "indent_size": "4"}, {"use_tabs": False, "tab_width": 4}),
        ({"indent_size": "tab", "tab_width": "8"}, {"tab_width": 8}),
        ({"tab_width": "3"}, {"tab_width": 3}),
        ({"max_line_length": "off"}, {}),
        (
            {"max_line_length": "120", "end_of_line": "crlf"},
            {"print_width": 120, "end_of_line": "crlf"},
        ),
        ({"end_of_line": "bogus", "charset": "utf-8"}, {}),
    ],
)
def test_editorconfig_to_options(properties: dict[str, str], expected: dict[str, object]) -> None:
    assert editorconfig_to_options(properties) == expected


def test_files_stop_at_root(tmp_path: Path) -> None:
    (tmp_path / ".editorconfig").write_text("[*]\nindent_size = 8\n", encoding="utf-8")
    project = tmp_path / "project"
    (project / "src").mkdir(parents=True)
    (project / ".editorconfig").write_text("root = true\n", encoding="utf-8")
    (project / "src" / ".editorconfig").write_text("[*]\nindent_size = 4\n", encoding="utf-8")

    files = editorconfig_files(project / "src" / "a.py")

    assert files == [
        (project / ".editorconfig").resolve(),
        (project / "src" / ".editorconfig").resolve(),
    ]


def test_nearest_file_wins(tmp_path: Path) -> None:
    (tmp_path / ".editorconfig").write_text(
        "root = true\n[*]\nindent_size = 8\nmax_line_length = 100\n", encoding="utf-8"
    )
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / ".editorconfig").write_text("[*.py]\nindent_size = 4\n", encoding="utf-8")

    assert load_editorconfig(tmp_path / "src" / "a.py") == {"tab_width": 4, "print_width": 100}
    assert load_editorconfig(tmp_path / "src" / "a.txt") == {"tab_width": 8, "print_width": 100}


def test_sections_match_relative_paths(tmp_path: Path) -> None:
    (tmp_path / ".editorconfig").write_text(
        "root = true\n[lib/**/*.js]\nindent_style = tab\n", encoding="utf-8"
    )

    assert load_editorconfig(tmp_path / "lib" / "x" / "a.js") == {"use_tabs": True}
    assert load_editorconfig(tmp_path / "a.js") is None


def test_numeric_range_sections(tmp_path: Path) -> None:
    (tmp_path / ".editorconfig").write_text(
        "root = true\n[test{1..3}.py]\nindent_size = 4\n", encoding="utf-8"
    )

    assert load_editorconfig(tmp_path / "test2.py") == {"tab_width": 4}
    assert load_editorconfig(tmp_path / "test4.py") is None
