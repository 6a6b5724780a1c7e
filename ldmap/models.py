"""Entities produced by the map parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Symbol:
    """An input section or object placed inside an output section."""

    name: str
    origin: int
    length: int
    object: str
    archive: str | None = None  # Only set when linked from a static archive

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "origin": self.origin,
            "length": self.length,
            "object": self.object,
        }
        if self.archive is not None:
            data["archive"] = self.archive
        return data


@dataclass
class Section:
    """An output section with the symbols placed inside it."""

    name: str
    origin: int
    length: int
    symbols: list[Symbol] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "origin": self.origin,
            "length": self.length,
            "symbols": [symbol.as_dict() for symbol in self.symbols],
        }


@dataclass
class MemoryRegion:
    """A memory region declared in the Memory Configuration block."""

    name: str
    origin: int
    length: int
    attributes: str
    sections: list[Section] = field(default_factory=list)

    @property
    def end(self) -> int:
        """Last address still considered part of the region (inclusive)."""
        return self.origin + self.length

    def contains(self, address: int) -> bool:
        return self.origin <= address <= self.end

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "origin": self.origin,
            "length": self.length,
            "attributes": self.attributes,
            "sections": [section.as_dict() for section in self.sections],
        }
