"""State machine turning GNU ld map file lines into memory regions."""

from __future__ import annotations

from collections.abc import AsyncIterable, Iterable
from contextlib import aclosing
from dataclasses import dataclass
import logging
from pathlib import Path

from .const import (
    MEMORY_CONFIGURATION_HEADER,
    MEMORY_MAP_HEADER,
    MEMORY_REGION_PATTERN,
    SECTION_CONTINUATION_PATTERN,
    SECTION_NAME_PATTERN,
    SECTION_PATTERN,
    SYMBOL_ARCHIVE_CONTINUATION_PATTERN,
    SYMBOL_ARCHIVE_PATTERN,
    SYMBOL_NAME_PATTERN,
    SYMBOL_OBJECT_CONTINUATION_PATTERN,
    SYMBOL_OBJECT_PATTERN,
    OutputFormat,
    SortOrder,
)
from .core import InvalidConfigError, OrphanSectionError
from .helpers import aiter_file_lines
from .models import MemoryRegion, Section, Symbol
from .output import flatten_map, sort_map, validate_sort

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Idle:
    """Waiting for the Memory Configuration header."""


@dataclass(frozen=True, slots=True)
class ParsingMemoryConfig:
    """Reading memory region rows."""


@dataclass(frozen=True, slots=True)
class ParsingMemoryMap:
    """Reading sections and symbols until the end of the input."""


@dataclass(frozen=True, slots=True)
class AwaitingSectionContinuation:
    """A section name was wrapped; its address and length follow."""

    name: str


@dataclass(frozen=True, slots=True)
class AwaitingSymbolContinuation:
    """A symbol name was wrapped; its address, length and object follow."""

    name: str


ParserState = (
    Idle
    | ParsingMemoryConfig
    | ParsingMemoryMap
    | AwaitingSectionContinuation
    | AwaitingSymbolContinuation
)

_PARSING_MEMORY_MAP = ParsingMemoryMap()


def find_owning_region(
    regions: Iterable[MemoryRegion], origin: int, section_name: str = ""
) -> MemoryRegion:
    """Return the first region whose address range contains ``origin``.

    The upper bound is inclusive, so an address equal to
    ``region.origin + region.length`` still belongs to the region.

    Args:
        regions: Regions in the order they were declared
        origin: Start address of the section being placed
        section_name: Used for the error message only

    Raises:
        OrphanSectionError: No region contains the address
    """
    # Linear scan; maps declare a handful of regions
    for region in regions:
        if region.contains(origin):
            return region
    raise OrphanSectionError(section_name, origin)


class MapParser:
    """Single-use parser for one GNU ld map file.

    Lines are pushed one at a time with :meth:`feed`. Lines that do not match
    any known record in the current state are skipped without diagnostics.
    """

    def __init__(self) -> None:
        self.regions: list[MemoryRegion] = []
        self.state: ParserState = Idle()
        # Section receiving symbols; None before the first one or after a discard
        self._section: Section | None = None
        self._line_count = 0

    def feed(self, line: str) -> None:
        """Consume a single line of the map file."""
        self._line_count += 1
        line = line.rstrip("\r\n")
        state = self.state

        if isinstance(state, Idle):
            if line == MEMORY_CONFIGURATION_HEADER:
                _LOGGER.debug("Memory configuration found at line %d", self._line_count)
                self.state = ParsingMemoryConfig()
        elif isinstance(state, ParsingMemoryConfig):
            self._parse_memory_config(line)
        elif isinstance(state, ParsingMemoryMap):
            self._parse_memory_map(line)
        elif isinstance(state, AwaitingSectionContinuation):
            if match := SECTION_CONTINUATION_PATTERN.match(line):
                self._open_section(state.name, match.group(1), match.group(2))
            self.state = _PARSING_MEMORY_MAP
        elif isinstance(state, AwaitingSymbolContinuation):
            self._parse_symbol_continuation(state.name, line)
            self.state = _PARSING_MEMORY_MAP

    def finish(self) -> list[MemoryRegion]:
        """Return the regions collected so far."""
        if isinstance(self.state, Idle):
            _LOGGER.debug("No memory configuration found in %d lines", self._line_count)
        section_count = sum(len(region.sections) for region in self.regions)
        symbol_count = sum(
            len(section.symbols)
            for region in self.regions
            for section in region.sections
        )
        _LOGGER.info(
            "Parsed %d memory regions, %d sections and %d symbols",
            len(self.regions),
            section_count,
            symbol_count,
        )
        return self.regions

    def _parse_memory_config(self, line: str) -> None:
        if line == MEMORY_MAP_HEADER:
            _LOGGER.debug("Memory map found at line %d", self._line_count)
            self.state = _PARSING_MEMORY_MAP
            return

        if not (match := MEMORY_REGION_PATTERN.match(line)):
            return

        region = MemoryRegion(
            name=match.group(1),
            origin=int(match.group(2), 16),
            length=int(match.group(3), 16),
            attributes=match.group(4),
        )
        _LOGGER.debug(
            "Memory region %s: 0x%x + 0x%x (%s)",
            region.name,
            region.origin,
            region.length,
            region.attributes,
        )
        self.regions.append(region)

    def _parse_memory_map(self, line: str) -> None:
        if line.startswith("."):
            if match := SECTION_PATTERN.match(line):
                self._open_section(match.group(1), match.group(2), match.group(3))
            elif match := SECTION_NAME_PATTERN.match(line):
                self.state = AwaitingSectionContinuation(match.group(1))
            return

        # " *fill*" and similar synthetic lines start with " *"
        if self._section is None or line[:1] != " " or line[1:2] == "*":
            return

        if match := SYMBOL_ARCHIVE_PATTERN.match(line):
            self._add_symbol(match.group(1), *match.group(2, 3, 4, 5))
        elif match := SYMBOL_OBJECT_PATTERN.match(line):
            self._add_symbol(match.group(1), *match.group(2, 3, 4))
        elif match := SYMBOL_NAME_PATTERN.match(line):
            self.state = AwaitingSymbolContinuation(match.group(1))

    def _parse_symbol_continuation(self, name: str, line: str) -> None:
        if match := SYMBOL_ARCHIVE_CONTINUATION_PATTERN.match(line):
            self._add_symbol(name, *match.group(1, 2, 3, 4))
        elif match := SYMBOL_OBJECT_CONTINUATION_PATTERN.match(line):
            self._add_symbol(name, *match.group(1, 2, 3))

    def _open_section(self, name: str, origin_hex: str, length_hex: str) -> None:
        origin = int(origin_hex, 16)
        if origin == 0:
            # Discarded sections are placed at address 0
            self._section = None
            return

        section = Section(name=name, origin=origin, length=int(length_hex, 16))
        region = find_owning_region(self.regions, origin, name)
        region.sections.append(section)
        self._section = section

    def _add_symbol(
        self,
        name: str,
        origin_hex: str,
        length_hex: str,
        object_file: str,
        archive: str | None = None,
    ) -> None:
        if self._section is None:
            return
        self._section.symbols.append(
            Symbol(
                name=name,
                origin=int(origin_hex, 16),
                length=int(length_hex, 16),
                object=object_file,
                archive=archive,
            )
        )


def parse_lines(lines: Iterable[str]) -> list[MemoryRegion]:
    """Parse map file lines into memory regions."""
    parser = MapParser()
    for line in lines:
        parser.feed(line)
    return parser.finish()


async def parse_lines_async(lines: AsyncIterable[str]) -> list[MemoryRegion]:
    """Parse map file lines pulled from an async line source.

    If the source stops early, the regions collected up to that point are
    returned.
    """
    parser = MapParser()
    async for line in lines:
        parser.feed(line)
    return parser.finish()


async def parse_mapfile(
    path: str | Path,
    sortby: str | None = None,
    order: str | SortOrder = SortOrder.ASC,
    output_format: str | OutputFormat = OutputFormat.OBJECT,
) -> list[MemoryRegion] | list[tuple]:
    """Parse a GCC map file, optionally sorting and flattening the result.

    Discarded sections are ignored.

    Args:
        path: Path to the map file
        sortby: Field to sort regions, sections and symbols by
        order: "asc" or "desc"
        output_format: "object" for nested regions, "table" for flat rows

    Returns:
        The list of regions, or one row per symbol in table mode

    Raises:
        MalformedSortFieldError: Unknown sort field or order
        InvalidConfigError: Unknown output format
    """
    if sortby is not None:
        # Reject bad options before reading anything
        validate_sort(sortby, order)
    try:
        output_format = OutputFormat(output_format)
    except ValueError as err:
        raise InvalidConfigError(
            f"Unknown output format '{output_format}', expected one of: "
            + ", ".join(f.value for f in OutputFormat)
        ) from err

    async with aclosing(aiter_file_lines(Path(path))) as lines:
        regions = await parse_lines_async(lines)

    if sortby is not None:
        sort_map(regions, sortby, order)

    if output_format == OutputFormat.TABLE:
        return flatten_map(regions)
    return regions
