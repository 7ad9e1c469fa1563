"""Error types raised while reading bundle identity.

Each error also subclasses the builtin that matches its nature, so callers
can catch ``ValueError`` / ``FileNotFoundError`` without importing these.
"""

from __future__ import annotations

from pathlib import Path


class BundleError(Exception):
    """Base class for all bundlekit errors."""


class MissingHeaderError(BundleError, ValueError):
    """A required manifest header is absent."""

    def __init__(self, header: str) -> None:
        self.header = header
        super().__init__(f"Header-Name {header} not found in Manifest!")


class VersionFormatError(BundleError, ValueError):
    """Text that does not parse as ``major[.minor[.micro[.qualifier]]]``."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"invalid version {text!r}: {reason}")


class ManifestFormatError(BundleError, ValueError):
    """Manifest text that violates the header/section syntax."""

    def __init__(self, line: int, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"invalid manifest at line {line}: {reason}")


class NotFoundError(BundleError, FileNotFoundError):
    """An exploded bundle folder has no ``META-INF`` directory."""

    def __init__(self, path: Path, meta_inf_dir: str = "META-INF") -> None:
        self.path = path
        super().__init__(f"can't find folder {meta_inf_dir} in folder {path}")
