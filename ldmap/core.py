"""Exceptions raised while parsing and rendering linker map files."""


class LdmapError(Exception):
    """General ldmap exception occurred."""


class OrphanSectionError(LdmapError):
    """A section's origin is not inside any declared memory region."""

    def __init__(self, section_name: str, origin: int) -> None:
        super().__init__(
            f"Section '{section_name}' at 0x{origin:x} is not inside any memory region"
        )
        self.section_name = section_name
        self.origin = origin


class MalformedSortFieldError(LdmapError):
    """The requested sort field or order is not known."""


class InputUnavailableError(LdmapError):
    """The map file could not be opened or read."""


class InvalidConfigError(LdmapError):
    """The configuration file could not be loaded or failed validation."""
