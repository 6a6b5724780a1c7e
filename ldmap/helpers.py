"""File and environment helpers shared by the parser and the command line."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterator
import logging
import os
from pathlib import Path
import tempfile

from .core import InputUnavailableError, LdmapError

_LOGGER = logging.getLogger(__name__)

# Approximate number of bytes handed back per worker thread read
_READ_CHUNK_HINT = 64 * 1024

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


def get_bool_env(var: str, default: bool = False) -> bool:
    """Read an on/off flag such as LDMAP_VERBOSE from the environment.

    Unset variables and values that are not a recognizable boolean fall back
    to ``default``.
    """
    if (value := os.getenv(var)) is None:
        return default
    flag = value.strip().lower()
    if flag in _TRUE_VALUES:
        return True
    if flag in _FALSE_VALUES:
        return False
    _LOGGER.warning("Ignoring %s=%r, expected a boolean", var, value)
    return default


def read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise InputUnavailableError(f"Error reading file {path}: {err}") from err


def iter_file_lines(path: Path) -> Iterator[str]:
    """Yield the lines of a text file one at a time."""
    try:
        with path.open(encoding="utf-8") as f_handle:
            yield from f_handle
    except (OSError, UnicodeDecodeError) as err:
        raise InputUnavailableError(f"Error reading file {path}: {err}") from err


async def aiter_file_lines(path: Path) -> AsyncIterator[str]:
    """Yield the lines of a text file without blocking the event loop.

    Reads happen in a worker thread in chunks of roughly 64 KiB. The file is
    closed when the iterator is exhausted or closed early.
    """
    try:
        f_handle = await asyncio.to_thread(path.open, encoding="utf-8")
    except OSError as err:
        raise InputUnavailableError(f"Error reading file {path}: {err}") from err

    try:
        while lines := await asyncio.to_thread(f_handle.readlines, _READ_CHUNK_HINT):
            for line in lines:
                yield line
    except (OSError, UnicodeDecodeError) as err:
        raise InputUnavailableError(f"Error reading file {path}: {err}") from err
    finally:
        f_handle.close()


def write_file(path: Path, text: str) -> None:
    """Replace ``path`` with a rendered report in one step.

    The report is written to a temporary file next to ``path`` and moved into
    place, so readers never see a half-written report. Parent directories are
    created as needed.
    """
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f_handle:
            tmp_path = Path(f_handle.name)
            f_handle.write(text)
        # NamedTemporaryFile creates 0o600 files; reports are meant to be shared
        tmp_path.chmod(0o644)
        tmp_path.replace(path)
        tmp_path = None
    except OSError as err:
        raise LdmapError(f"Could not write report to {path}: {err}") from err
    finally:
        if tmp_path is not None:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError as err:
                _LOGGER.error("Could not remove temporary file %s: %s", tmp_path, err)
