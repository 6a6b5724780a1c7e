"""Constants for GNU ld map file parsing."""

from enum import StrEnum
import re

__version__ = "1.0.0"

# Anchor lines that switch the parser between blocks of the map file
MEMORY_CONFIGURATION_HEADER = "Memory Configuration"
MEMORY_MAP_HEADER = "Linker script and memory map"

_HEX = r"0x([0-9a-fA-F]+)"

# Memory configuration row: name, origin, length, attributes
# Example: FLASH            0x08000000         0x00020000         xr
MEMORY_REGION_PATTERN = re.compile(rf"^(\S+)\s+{_HEX}\s+{_HEX}\s+([rwx]+)$")

# One-line output section; anything after the length is ignored
# Example: .text           0x08000000     0x1000
SECTION_PATTERN = re.compile(rf"^(\S*)\s+{_HEX}\s+{_HEX}")

# Output section name wrapped onto its own line
SECTION_NAME_PATTERN = re.compile(r"^(\S+)$")

# Second line of a wrapped output section (optional trailing "load address ...")
SECTION_CONTINUATION_PATTERN = re.compile(rf"^\s*{_HEX}\s+{_HEX}(?:\s.*)?$")

# One-line symbols, indented by a single space
# Example:  .text.main     0x08000100       0x40 main.o
# Example:  foo            0x08000200       0x10 bar.o(libbar.a)
SYMBOL_ARCHIVE_PATTERN = re.compile(rf"^\s(\S+)\s+{_HEX}\s+{_HEX}\s+(\S+)\((\S+)\)$")
SYMBOL_OBJECT_PATTERN = re.compile(rf"^\s(\S+)\s+{_HEX}\s+{_HEX}\s+(\S+)$")

# Symbol name wrapped onto its own line
SYMBOL_NAME_PATTERN = re.compile(r"^\s(\S+)$")

# Second line of a wrapped symbol
SYMBOL_ARCHIVE_CONTINUATION_PATTERN = re.compile(
    rf"^\s*{_HEX}\s+{_HEX}\s+(\S+)\((\S+)\)$"
)
SYMBOL_OBJECT_CONTINUATION_PATTERN = re.compile(rf"^\s*{_HEX}\s+{_HEX}\s+(\S+)$")

# Fields a parse result can be sorted by
SORT_FIELDS = ("name", "origin", "length", "archive", "object")


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


# Long spellings accepted wherever a sort order is parsed
SORT_ORDER_ALIASES = {
    "ascending": SortOrder.ASC,
    "descending": SortOrder.DESC,
}


class OutputFormat(StrEnum):
    """Shape of the parse result handed to the writers."""

    OBJECT = "object"
    TABLE = "table"


class ReportFormat(StrEnum):
    """Serialization selected on the command line."""

    JSON = "json"
    HTML = "html"


# Placeholder in the HTML template replaced with the table rows
HTML_DATA_PLACEHOLDER = "{{datatables-data}}"

ENV_VERBOSE = "LDMAP_VERBOSE"
