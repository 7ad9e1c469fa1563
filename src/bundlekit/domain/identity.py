"""ComponentIdentity — who a bundle is: symbolic name + version.

An identity may carry a caller-supplied *context* (a path, a repository
handle, anything) that further pins down where the bundle came from. The
context is stored by reference and never copied or inspected.

Ordering is by name, then by version. Context never takes part in
ordering, equality, or hashing.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Any, Generic, TypeVar

from bundlekit.domain.errors import MissingHeaderError
from bundlekit.domain.manifest import BUNDLE_SYMBOLICNAME, BUNDLE_VERSION, Manifest
from bundlekit.domain.version import Version

ContextT = TypeVar("ContextT")


def _required_header(manifest: Manifest, header: str) -> str:
    """Return *header* from the main section cut at the first ``;``.

    The text is returned untrimmed; only :meth:`Version.parse` strips
    whitespace.
    """
    value = manifest.main_attributes.get(header)
    if value is None:
        raise MissingHeaderError(header)
    return value.split(";", 1)[0]


@total_ordering
class ComponentIdentity(Generic[ContextT]):
    """Immutable ``(name, version, context)`` triple.

    Attributes:
        name: Bundle symbolic name.
        version: Parsed bundle version.
        context: Opaque caller object, or None.
    """

    __slots__ = ("_context", "_name", "_version")

    def __init__(self, name: str, version: Version, context: ContextT | None = None) -> None:
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_version", version)
        object.__setattr__(self, "_context", context)

    @classmethod
    def from_manifest(
        cls, manifest: Manifest, context: ContextT | None = None
    ) -> ComponentIdentity[ContextT]:
        """Build an identity from a manifest's main section.

        ``Bundle-SymbolicName: com.example.foo;singleton:=true`` yields the
        name ``com.example.foo``; the same truncation applies to
        ``Bundle-Version``.

        Raises:
            MissingHeaderError: If either header is absent.
            VersionFormatError: If the version does not parse.
        """
        name = _required_header(manifest, BUNDLE_SYMBOLICNAME)
        version = Version.parse(_required_header(manifest, BUNDLE_VERSION))
        return cls(name, version, context)

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> Version:
        return self._version

    @property
    def context(self) -> ContextT | None:
        return self._context

    def __setattr__(self, key: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, key: str) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def _key(self) -> tuple[str, Version]:
        return (self._name, self._version)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComponentIdentity):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ComponentIdentity):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        if self._context is None:
            return f"{self._name}:{self._version}"
        return f"{self._name}:{self._version}:{self._context}"

    def __repr__(self) -> str:
        return (
            f"ComponentIdentity(name={self._name!r}, version={str(self._version)!r}, "
            f"context={self._context!r})"
        )


def compare(a: ComponentIdentity[Any], b: ComponentIdentity[Any]) -> int:
    """Three-way comparison: name first, then version. Returns -1, 0 or 1."""
    if a.name != b.name:
        return -1 if a.name < b.name else 1
    if a.version != b.version:
        return -1 if a.version < b.version else 1
    return 0


def is_bundle(manifest: Manifest | None) -> bool:
    """True if *manifest* has both ``Bundle-SymbolicName`` and ``Bundle-Version``."""
    if manifest is None:
        return False
    attrs = manifest.main_attributes
    return BUNDLE_SYMBOLICNAME in attrs and BUNDLE_VERSION in attrs
