"""Sorting, flattening and serialization of parse results."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import fields
from functools import cmp_to_key
import json
import logging
from pathlib import Path
from typing import Any

from .const import (
    HTML_DATA_PLACEHOLDER,
    SORT_FIELDS,
    SORT_ORDER_ALIASES,
    SortOrder,
)
from .core import MalformedSortFieldError
from .helpers import read_file
from .models import MemoryRegion, Section, Symbol

_LOGGER = logging.getLogger(__name__)

# Type alias for a flattened row:
# (region, section, symbol, hex origin, length, archive, object)
RowType = tuple[str, str, str, str, int, str | None, str]

TEMPLATE_PATH = Path(__file__).parent / "assets" / "index.html"


def parse_sort_order(order: str | SortOrder) -> SortOrder:
    """Normalize a sort order, accepting long spellings like "descending"."""
    value = str(order).lower()
    if value in SORT_ORDER_ALIASES:
        return SORT_ORDER_ALIASES[value]
    try:
        return SortOrder(value)
    except ValueError as err:
        raise MalformedSortFieldError(
            f"Unknown sort order '{order}', expected one of: "
            + ", ".join(o.value for o in SortOrder)
        ) from err


def validate_sort(field: str, order: str | SortOrder = SortOrder.ASC) -> SortOrder:
    """Check sort options, returning the normalized order.

    Raises:
        MalformedSortFieldError: Unknown field or order
    """
    if field not in SORT_FIELDS:
        raise MalformedSortFieldError(
            f"Cannot sort by '{field}', expected one of: {', '.join(SORT_FIELDS)}"
        )
    return parse_sort_order(order)


def _has_field(cls: type, field: str) -> bool:
    return any(f.name == field for f in fields(cls))


def _sort_key(field: str, order: SortOrder) -> Callable[[Any], Any]:
    """Build a strict two-way comparator; it never reports two items as equal."""

    def value(item: Any) -> Any:
        result = getattr(item, field)
        return "" if result is None else result

    if order == SortOrder.DESC:

        def compare(a: Any, b: Any) -> int:
            return 1 if value(a) < value(b) else -1

    else:

        def compare(a: Any, b: Any) -> int:
            return 1 if value(a) > value(b) else -1

    return cmp_to_key(compare)


def sort_map(
    regions: list[MemoryRegion],
    field: str,
    order: str | SortOrder = SortOrder.ASC,
) -> list[MemoryRegion]:
    """Sort regions, their sections and the sections' symbols in place.

    Levels whose entities do not carry ``field`` (e.g. sections for "object")
    keep their current order.
    """
    order = validate_sort(field, order)
    key = _sort_key(field, order)
    sort_regions = _has_field(MemoryRegion, field)
    sort_sections = _has_field(Section, field)
    sort_symbols = _has_field(Symbol, field)
    _LOGGER.debug("Sorting by %s (%s)", field, order)

    if sort_regions:
        regions.sort(key=key)
    for region in regions:
        if sort_sections:
            region.sections.sort(key=key)
        if not sort_symbols:
            continue
        for section in region.sections:
            section.symbols.sort(key=key)
    return regions


def flatten_map(regions: Sequence[MemoryRegion]) -> list[RowType]:
    """Flatten regions into one row per symbol."""
    return [
        (
            region.name,
            section.name,
            symbol.name,
            hex(symbol.origin),
            symbol.length,
            symbol.archive,
            symbol.object,
        )
        for region in regions
        for section in region.sections
        for symbol in section.symbols
    ]


def _to_serializable(data: Sequence[MemoryRegion] | Sequence[RowType]) -> list[Any]:
    return [
        item.as_dict() if isinstance(item, MemoryRegion) else list(item)
        for item in data
    ]


def render_json(data: Sequence[MemoryRegion] | Sequence[RowType]) -> str:
    """Serialize regions (object mode) or rows (table mode) as JSON."""
    return json.dumps(_to_serializable(data), indent=2)


def render_html(rows: Sequence[RowType], template: str | None = None) -> str:
    """Embed the table rows into the HTML report template."""
    if template is None:
        template = read_file(TEMPLATE_PATH)
    if HTML_DATA_PLACEHOLDER not in template:
        _LOGGER.warning("HTML template has no %s placeholder", HTML_DATA_PLACEHOLDER)
    return template.replace(HTML_DATA_PLACEHOLDER, render_json(rows))
