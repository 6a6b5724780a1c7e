"""Report options: validation and the optional YAML configuration file."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

import voluptuous as vol
import yaml

from .const import SORT_FIELDS, OutputFormat, ReportFormat, SortOrder
from .core import InvalidConfigError, MalformedSortFieldError
from .helpers import read_file
from .output import parse_sort_order

_LOGGER = logging.getLogger(__name__)

CONF_SORTBY = "sortby"
CONF_ORDER = "order"
CONF_FORMAT = "format"
CONF_OUTPUT = "output"

_SORT_KEYS = (CONF_SORTBY, CONF_ORDER)


def sort_order(value: Any) -> SortOrder:
    if not isinstance(value, str):
        raise vol.Invalid(f"Sort order must be a string, got {value!r}")
    try:
        return parse_sort_order(value)
    except MalformedSortFieldError as err:
        raise vol.Invalid(str(err)) from err


OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_SORTBY, default=None): vol.Any(
            None, vol.All(str, vol.In(SORT_FIELDS))
        ),
        vol.Optional(CONF_ORDER, default=SortOrder.ASC.value): sort_order,
        vol.Optional(CONF_FORMAT, default=ReportFormat.JSON.value): vol.All(
            str, vol.Lower, vol.Coerce(ReportFormat)
        ),
        vol.Optional(CONF_OUTPUT, default=None): vol.Any(
            None, vol.All(str, vol.Coerce(Path))
        ),
    }
)


@dataclass
class ReportOptions:
    """Validated options for one report run."""

    sortby: str | None = None
    order: SortOrder = SortOrder.ASC
    report_format: ReportFormat = ReportFormat.JSON
    output: Path | None = None

    @property
    def output_format(self) -> OutputFormat:
        """HTML reports render the flattened table, JSON the nested regions."""
        if self.report_format == ReportFormat.HTML:
            return OutputFormat.TABLE
        return OutputFormat.OBJECT


def validate_options(config: dict[str, Any]) -> ReportOptions:
    """Validate raw option values.

    Raises:
        MalformedSortFieldError: Bad sort field or order
        InvalidConfigError: Any other invalid option
    """
    try:
        validated = OPTIONS_SCHEMA(config)
    except vol.Invalid as err:
        if err.path and err.path[0] in _SORT_KEYS:
            raise MalformedSortFieldError(
                f"Invalid option '{err.path[0]}': {err.msg}"
            ) from err
        raise InvalidConfigError(f"Invalid options: {err}") from err

    return ReportOptions(
        sortby=validated[CONF_SORTBY],
        order=validated[CONF_ORDER],
        report_format=validated[CONF_FORMAT],
        output=validated[CONF_OUTPUT],
    )


def load_config(path: Path) -> dict[str, Any]:
    """Load the raw options mapping from a YAML file."""
    try:
        data = yaml.safe_load(read_file(path))
    except yaml.YAMLError as err:
        raise InvalidConfigError(f"Error parsing {path}: {err}") from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigError(f"{path} must contain a mapping of options")
    _LOGGER.debug("Loaded options from %s: %s", path, data)
    return data


def build_options(
    cli_values: dict[str, Any], config_path: Path | None = None
) -> ReportOptions:
    """Merge the config file with command line values and validate the result.

    Command line values that are None leave the file's value in place.
    """
    config: dict[str, Any] = {}
    if config_path is not None:
        config.update(load_config(config_path))
    config.update({key: value for key, value in cli_values.items() if value is not None})
    return validate_options(config)
