"""Parser for GNU ld memory map files."""

from .core import (
    InputUnavailableError,
    InvalidConfigError,
    LdmapError,
    MalformedSortFieldError,
    OrphanSectionError,
)
from .models import MemoryRegion, Section, Symbol
from .output import flatten_map, render_html, render_json, sort_map
from .parser import (
    MapParser,
    find_owning_region,
    parse_lines,
    parse_lines_async,
    parse_mapfile,
)

__all__ = [
    "InputUnavailableError",
    "InvalidConfigError",
    "LdmapError",
    "MalformedSortFieldError",
    "MapParser",
    "MemoryRegion",
    "OrphanSectionError",
    "Section",
    "Symbol",
    "find_owning_region",
    "flatten_map",
    "parse_lines",
    "parse_lines_async",
    "parse_mapfile",
    "render_html",
    "render_json",
    "sort_map",
]
