"""Locating bundlekit.toml.

``BUNDLEKIT_CONFIG`` wins when set; otherwise the nearest ``bundlekit.toml``
in the starting directory or one of its parents is used.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "bundlekit.toml"
CONFIG_ENV_VAR = "BUNDLEKIT_CONFIG"


def _parents(start: Path) -> Iterator[Path]:
    """Yield *start* and every ancestor up to the filesystem root."""
    current = start.resolve()
    yield current
    yield from current.parents


def _from_env(base: Path) -> Path | None:
    raw = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if not raw:
        return None
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base / path
    return path if path.is_file() else None


def find_config(start: Path | None = None, *, filename: str = CONFIG_FILENAME) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    A relative ``BUNDLEKIT_CONFIG`` is resolved against *start*. When the
    variable is set but names no file, the walk-up is skipped and None is
    returned.
    """
    base = start or Path.cwd()
    if os.environ.get(CONFIG_ENV_VAR, "").strip():
        return _from_env(base)
    return next(
        (d / filename for d in _parents(base) if (d / filename).is_file()),
        None,
    )
