"""Tests for report option validation and the YAML config file."""

from __future__ import annotations

from pathlib import Path

import pytest

from ldmap import config
from ldmap.const import OutputFormat, ReportFormat, SortOrder
from ldmap.core import InputUnavailableError, InvalidConfigError, MalformedSortFieldError


def test_validate_options_defaults() -> None:
    options = config.validate_options({})

    assert options == config.ReportOptions()
    assert options.order is SortOrder.ASC
    assert options.report_format is ReportFormat.JSON
    assert options.output_format is OutputFormat.OBJECT


def test_validate_options_html_uses_table() -> None:
    options = config.validate_options(
        {"sortby": "origin", "order": "Descending", "format": "HTML", "output": "out.html"}
    )

    assert options.sortby == "origin"
    assert options.order is SortOrder.DESC
    assert options.report_format is ReportFormat.HTML
    assert options.output_format is OutputFormat.TABLE
    assert options.output == Path("out.html")


@pytest.mark.parametrize(
    "raw",
    (
        {"sortby": "size"},
        {"sortby": 3},
        {"order": "up"},
        {"order": 1},
    ),
)
def test_validate_options_bad_sort(raw: dict) -> None:
    with pytest.raises(MalformedSortFieldError):
        config.validate_options(raw)


@pytest.mark.parametrize(
    "raw",
    (
        {"format": "xml"},
        {"output": 5},
        {"colour": "red"},
    ),
)
def test_validate_options_invalid(raw: dict) -> None:
    with pytest.raises(InvalidConfigError):
        config.validate_options(raw)


def test_load_config(tmp_path: Path) -> None:
    path = tmp_path / "ldmap.yaml"
    path.write_text("sortby: length\norder: desc\n", encoding="utf-8")

    assert config.load_config(path) == {"sortby": "length", "order": "desc"}


def test_load_config_empty(tmp_path: Path) -> None:
    path = tmp_path / "ldmap.yaml"
    path.write_text("", encoding="utf-8")

    assert config.load_config(path) == {}


@pytest.mark.parametrize(
    "text",
    (
        "- sortby\n- length\n",
        "sortby: [unclosed\n",
    ),
)
def test_load_config_invalid(tmp_path: Path, text: str) -> None:
    path = tmp_path / "ldmap.yaml"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(InvalidConfigError):
        config.load_config(path)


def test_load_config_missing(tmp_path: Path) -> None:
    with pytest.raises(InputUnavailableError):
        config.load_config(tmp_path / "missing.yaml")


def test_build_options_command_line_wins(tmp_path: Path) -> None:
    path = tmp_path / "ldmap.yaml"
    path.write_text("sortby: length\norder: desc\nformat: html\n", encoding="utf-8")

    options = config.build_options(
        {"sortby": "name", "order": None, "format": None, "output": None}, path
    )

    assert options.sortby == "name"
    assert options.order is SortOrder.DESC
    assert options.report_format is ReportFormat.HTML


def test_build_options_without_file() -> None:
    options = config.build_options({"sortby": None, "format": "json"})

    assert options.sortby is None
    assert options.report_format is ReportFormat.JSON
