"""
ldmap Unittests
~~~~~~~~~~~~~~~

Configuration file for unit tests.

If adding unit tests ensure that they are fast.

"""

from pathlib import Path
import sys

import pytest

here = Path(__file__).parent

# Configure location of package root
package_root = here.parent.parent
sys.path.insert(0, package_root.as_posix())


@pytest.fixture
def fixture_path() -> Path:
    """
    Location of all fixture files.
    """
    return here / "fixtures"


@pytest.fixture
def firmware_map(fixture_path: Path) -> Path:
    """Map file of a small Cortex-M firmware."""
    return fixture_path / "firmware.map"


@pytest.fixture
def map_lines():
    """Build map file lines with the given memory configuration and map body."""

    def _build(config: list[str], body: list[str]) -> list[str]:
        return [
            "Memory Configuration",
            "",
            "Name             Origin             Length             Attributes",
            *config,
            "",
            "Linker script and memory map",
            "",
            *body,
        ]

    return _build
