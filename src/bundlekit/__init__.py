"""bundlekit — identify OSGi-style bundles by symbolic name and version."""

from bundlekit.config.logging import configure_from_settings, configure_logging
from bundlekit.config.settings import BundleSettings
from bundlekit.domain.errors import (
    BundleError,
    ManifestFormatError,
    MissingHeaderError,
    NotFoundError,
    VersionFormatError,
)
from bundlekit.domain.identity import ComponentIdentity, compare, is_bundle
from bundlekit.domain.manifest import (
    BUNDLE_SYMBOLICNAME,
    BUNDLE_VERSION,
    Attributes,
    Manifest,
    parse_manifest,
    render_manifest,
)
from bundlekit.domain.version import Version
from bundlekit.infrastructure.filesystem import (
    read_exploded_bundle,
    read_manifest,
    write_manifest,
)

__all__ = [
    "BUNDLE_SYMBOLICNAME",
    "BUNDLE_VERSION",
    "Attributes",
    "BundleError",
    "BundleSettings",
    "ComponentIdentity",
    "Manifest",
    "ManifestFormatError",
    "MissingHeaderError",
    "NotFoundError",
    "Version",
    "VersionFormatError",
    "compare",
    "configure_from_settings",
    "configure_logging",
    "is_bundle",
    "parse_manifest",
    "read_exploded_bundle",
    "read_manifest",
    "render_manifest",
    "write_manifest",
]
