"""Locate and load ``checkoutxml.toml``.

An explicit ``CHECKOUTXML_CONFIG`` path wins; otherwise the directories
from the starting point up to the filesystem root are searched in order.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

CONFIG_FILENAME = "checkoutxml.toml"
CONFIG_ENV_VAR = "CHECKOUTXML_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest config file at or above *start*, or None."""
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, object]:
    """Parse *path* as TOML. Errors propagate as ``tomllib.TOMLDecodeError``."""
    with path.open("rb") as fh:
        return tomllib.load(fh)

