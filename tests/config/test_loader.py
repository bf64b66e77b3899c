# fmtopts:header:start
#
#   project      : FmtOpts
#   file         : test_loader.py
#   file_relpath : tests/config/test_loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# fmtopts:header:end

"""Tests for config file discovery and loading (`fmtopts.config.loader`)."""

from __future__ import annotations

from pathlib import Path

import pytest

from fmtopts.config.loader import (
    Override,
    find_config_file,
    load_config_file,
    load_toml_dict,
    resolve_config,
    resolve_config_file,
)
from fmtopts.errors import ConfigurationError


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_load_toml_dict_returns_plain_values(tmp_path: Path) -> None:
    path = write(tmp_path / "fmtopts.toml", "print_width = 100\nplugins = ['a']\n")

    data = load_toml_dict(path)

    assert data == {"print_width": 100, "plugins": ["a"]}
    assert type(data) is dict


def test_invalid_toml_raises(tmp_path: Path) -> None:
    path = write(tmp_path / "fmtopts.toml", "print_width = = 1\n")

    with pytest.raises(ConfigurationError, match="Invalid configuration file"):
        load_toml_dict(path)


def test_discovery_prefers_nearest_directory(isolation: Path) -> None:
    write(isolation / ".fmtoptsrc.toml", "print_width = 100\n")
    nested = write(isolation / "pkg" / "fmtopts.toml", "print_width = 60\n")
    target = write(isolation / "pkg" / "deep" / "a.txt", "")

    assert find_config_file(target.parent) == nested.resolve()
    assert resolve_config_file(target) == nested.resolve()


def test_discovery_order_within_a_directory(isolation: Path) -> None:
    write(isolation / "fmtopts.toml", "")
    rc = write(isolation / ".fmtoptsrc.toml", "")

    assert find_config_file(isolation) == rc.resolve()


def test_pyproject_needs_tool_table(isolation: Path) -> None:
    write(isolation / "pyproject.toml", "[project]\nname = 'x'\n")
    assert find_config_file(isolation) is None

    pyproject = write(
        isolation / "pyproject.toml", "[project]\nname = 'x'\n\n[tool.fmtopts]\nsemi = false\n"
    )
    assert find_config_file(isolation) == pyproject.resolve()
    assert load_config_file(pyproject).options == {"semi": False}


def test_overrides(isolation: Path) -> None:
    path = write(
        isolation / "fmtopts.toml",
        """
print_width = 100

[[overrides]]
files = ["*.md"]
exclude_files = ["CHANGELOG.md"]
options = { prose_wrap = "always", print_width = 70 }
""",
    )
    config = load_config_file(path)

    assert config.overrides == (
        Override(
            files=("*.md",),
            exclude_files=("CHANGELOG.md",),
            options={"prose_wrap": "always", "print_width": 70},
        ),
    )
    assert config.options_for(isolation / "docs" / "a.md") == {
        "print_width": 70,
        "prose_wrap": "always",
    }
    assert config.options_for(isolation / "CHANGELOG.md") == {"print_width": 100}
    assert config.options_for(None) == {"print_width": 100}


@pytest.mark.parametrize(
    "text",
    [
        "overrides = 1\n",
        "[[overrides]]\noptions = { semi = false }\n",
        "[[overrides]]\nfiles = ['*']\noptions = 1\n",
    ],
)
def test_malformed_overrides(tmp_path: Path, text: str) -> None:
    path = write(tmp_path / "fmtopts.toml", text)

    with pytest.raises(ConfigurationError):
        load_config_file(path)


def test_resolve_config_none_without_sources(isolation: Path) -> None:
    assert resolve_config(isolation / "a.txt", editorconfig=True) is None


def test_resolve_config_empty_file(isolation: Path) -> None:
    write(isolation / "fmtopts.toml", "")

    assert resolve_config(isolation / "a.txt") == {}


def test_resolve_config_layers_editorconfig_below_config(isolation: Path) -> None:
    write(isolation / ".editorconfig", "root = true\n[*]\nindent_size = 4\nmax_line_length = 90\n")
    write(isolation / "fmtopts.toml", "print_width = 100\n")

    assert resolve_config(isolation / "a.txt", editorconfig=True) == {
        "tab_width": 4,
        "print_width": 100,
    }
    assert resolve_config(isolation / "a.txt") == {"print_width": 100}


def test_explicit_config_skips_discovery(isolation: Path) -> None:
    write(isolation / "fmtopts.toml", "print_width = 100\n")
    other = write(isolation / "conf" / "custom.toml", "print_width = 42\n")

    assert resolve_config(isolation / "a.txt", config=other) == {"print_width": 42}


def test_explicit_config_must_exist(isolation: Path) -> None:
    with pytest.raises(ConfigurationError, match="Config file not found"):
        resolve_config(isolation / "a.txt", config=isolation / "missing.toml")


def test_anonymous_input_searches_cwd(isolation: Path) -> None:
    write(isolation / "fmtopts.toml", "semi = false\n")

    assert resolve_config(None) == {"semi": False}
