"""Manifest files inside exploded bundle folders.

An exploded bundle is a plain directory holding what would otherwise be
packed into a jar. Its manifest lives at ``<folder>/META-INF/MANIFEST.MF``
(both names can be overridden through :class:`ManifestConfig`).

Parsing and identity rules live in :mod:`bundlekit.domain`; this module only
opens and writes files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from bundlekit.config.models import ManifestConfig
from bundlekit.domain.errors import NotFoundError
from bundlekit.domain.identity import ComponentIdentity
from bundlekit.domain.manifest import Manifest, parse_manifest, render_manifest

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_LAYOUT = ManifestConfig()


def manifest_path(folder: Path, layout: ManifestConfig | None = None) -> Path:
    """Where *folder* keeps its manifest. Does not touch the filesystem."""
    layout = layout or _DEFAULT_LAYOUT
    return folder / layout.meta_inf_dir / layout.manifest_name


def read_manifest(folder: Path, layout: ManifestConfig | None = None) -> Manifest:
    """Read and parse the manifest of the exploded bundle in *folder*.

    Raises:
        NotFoundError: If *folder* has no ``META-INF`` directory.
        OSError: If the manifest file cannot be opened or read.
        ManifestFormatError: If the manifest text is malformed.
    """
    layout = layout or _DEFAULT_LAYOUT
    meta_inf = folder / layout.meta_inf_dir
    if not meta_inf.exists():
        raise NotFoundError(folder.absolute(), layout.meta_inf_dir)

    path = meta_inf / layout.manifest_name
    logger.debug("Reading manifest %s", path)
    with path.open("rb") as fh:
        return parse_manifest(fh.read())


def read_exploded_bundle(
    folder: Path,
    context: T | None = None,
    layout: ManifestConfig | None = None,
) -> ComponentIdentity[T]:
    """Identity of the exploded bundle in *folder*, carrying *context*."""
    return ComponentIdentity.from_manifest(read_manifest(folder, layout), context)


def write_manifest(
    folder: Path,
    manifest: Manifest,
    layout: ManifestConfig | None = None,
) -> Path:
    """Write *manifest* into *folder*, creating ``META-INF`` if needed.

    Returns the path of the written manifest file.
    """
    path = manifest_path(folder, layout)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(render_manifest(manifest).encode("utf-8"))
    logger.debug("Wrote manifest %s", path)
    return path
