"""JAR manifest model, parser, and renderer.

A manifest is a main section followed by zero or more per-entry sections,
separated by blank lines::

    Manifest-Version: 1.0
    Bundle-SymbolicName: com.example.foo;singleton:=true
    Bundle-Version: 1.2.3

    Name: com/example/foo/Impl.class
    SHA-256-Digest: ...

Header names are matched case-insensitively. A line beginning with a single
space continues the previous header's value. Written lines are wrapped at
72 bytes.

Pure functions and values only; file access lives in
:mod:`bundlekit.infrastructure.filesystem`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from bundlekit.domain.errors import ManifestFormatError

MANIFEST_VERSION = "Manifest-Version"
BUNDLE_SYMBOLICNAME = "Bundle-SymbolicName"
BUNDLE_VERSION = "Bundle-Version"
ENTRY_NAME = "Name"

MAX_LINE_BYTES = 72

_HEADER_NAME = re.compile(r"[A-Za-z0-9_-]{1,70}")
_LINE_BREAK = re.compile(rb"\r\n|\r|\n")
_BOM = b"\xef\xbb\xbf"


class Attributes(Mapping[str, str]):
    """Read-only header mapping with case-insensitive lookup.

    Keys keep the spelling they were first given; a later duplicate
    (in any case) replaces the value but not the spelling.
    """

    def __init__(self, items: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        self._data: dict[str, tuple[str, str]] = {}
        pairs = items.items() if isinstance(items, Mapping) else items
        for name, value in pairs:
            key = name.lower()
            original = self._data[key][0] if key in self._data else name
            self._data[key] = (original, value)

    def __getitem__(self, name: str) -> str:
        if not isinstance(name, str):
            raise KeyError(name)
        return self._data[name.lower()][1]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._data

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Attributes):
            return self._data.keys() == other._data.keys() and all(
                self._data[k][1] == other._data[k][1] for k in self._data
            )
        if isinstance(other, Mapping):
            return self == Attributes(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Attributes({dict(self.items())!r})"


@dataclass(frozen=True)
class Manifest:
    """Parsed manifest: the main section plus named per-entry sections."""

    main_attributes: Attributes = field(default_factory=Attributes)
    entries: dict[str, Attributes] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _decode(raw: bytes, lineno: int) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestFormatError(lineno, "not valid UTF-8") from exc


def _split_header(line: bytes, lineno: int) -> tuple[str, bytes]:
    raw_name, sep, value = line.partition(b": ")
    if not sep:
        # "Header:" with nothing after it is an empty value.
        if line.endswith(b":"):
            raw_name = line[:-1]
        else:
            raise ManifestFormatError(lineno, "invalid header field")
    name = _decode(raw_name, lineno)
    if not _HEADER_NAME.fullmatch(name):
        if not sep:
            raise ManifestFormatError(lineno, "invalid header field")
        raise ManifestFormatError(lineno, f"invalid header name {name!r}")
    return name, value


def _fold_sections(lines: list[bytes]) -> list[list[tuple[int, str, str]]]:
    """Group lines into sections of ``(lineno, name, value)`` headers.

    Continuation bytes are joined before the value is decoded; a 72-byte
    wrap may split a multi-byte UTF-8 sequence.
    """
    sections: list[list[tuple[int, str, str]]] = []
    current: list[tuple[int, str, str]] = []
    pending: tuple[int, str, list[bytes]] | None = None

    def flush() -> None:
        nonlocal pending
        if pending is not None:
            lineno, name, chunks = pending
            current.append((lineno, name, _decode(b"".join(chunks), lineno)))
            pending = None

    for lineno, line in enumerate(lines, start=1):
        if line == b"":
            flush()
            if current or not sections:
                sections.append(current)
            current = []
            continue
        if line.startswith(b" "):
            if pending is None:
                raise ManifestFormatError(lineno, "continuation line without a header")
            pending[2].append(line[1:])
            continue
        flush()
        name, value = _split_header(line, lineno)
        pending = (lineno, name, [value])

    flush()
    if current or not sections:
        sections.append(current)
    return sections


def parse_manifest(data: bytes | str) -> Manifest:
    """Parse manifest text (UTF-8 bytes or str) into a :class:`Manifest`.

    Raises:
        ManifestFormatError: On malformed headers, orphan continuation
            lines, undecodable bytes, or entry sections without ``Name``.
    """
    raw = data.encode("utf-8", "surrogatepass") if isinstance(data, str) else data
    if raw.startswith(_BOM):
        raw = raw[len(_BOM) :]
    lines = _LINE_BREAK.split(raw)
    if lines and lines[-1] == b"":
        lines.pop()

    sections = _fold_sections(lines)
    main = Attributes((name, value) for _, name, value in sections[0])

    entries: dict[str, Attributes] = {}
    for section in sections[1:]:
        if not section:
            continue
        lineno, first_name, entry_name = section[0]
        if first_name.lower() != ENTRY_NAME.lower():
            raise ManifestFormatError(lineno, "entry section must start with 'Name'")
        attrs = Attributes((name, value) for _, name, value in section[1:])
        if entry_name in entries:
            merged = dict(entries[entry_name].items())
            merged.update(attrs.items())
            attrs = Attributes(merged)
        entries[entry_name] = attrs

    return Manifest(main_attributes=main, entries=entries)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _wrap_header(name: str, value: str) -> list[str]:
    """Split one header into lines of at most 72 UTF-8 bytes."""
    if any(c in value for c in "\r\n\x00"):
        msg = f"Header {name!r} value contains a line break or NUL"
        raise ValueError(msg)
    out: list[str] = []
    chunk = ""
    size = 0
    for char in f"{name}: {value}":
        width = len(char.encode("utf-8"))
        if size + width > MAX_LINE_BYTES:
            out.append(chunk)
            chunk, size = " ", 1
        chunk += char
        size += width
    out.append(chunk)
    return out


def _render_section(attrs: Mapping[str, str], first: str | None = None) -> list[str]:
    lines: list[str] = []
    if first is not None and first in attrs:
        lines.extend(_wrap_header(first, attrs[first]))
    for name, value in attrs.items():
        if first is not None and name.lower() == first.lower():
            continue
        if not _HEADER_NAME.fullmatch(name):
            msg = f"Invalid header name: {name!r}"
            raise ValueError(msg)
        lines.extend(_wrap_header(name, value))
    return lines


def render_manifest(manifest: Manifest) -> str:
    """Render *manifest* as CRLF-terminated text.

    ``Manifest-Version`` is written first when present. Entry sections
    follow the main section, each preceded by a blank line.
    """
    lines = _render_section(manifest.main_attributes, first=MANIFEST_VERSION)
    lines.append("")
    for entry_name, attrs in manifest.entries.items():
        lines.extend(_wrap_header(ENTRY_NAME, entry_name))
        lines.extend(_render_section(attrs))
        lines.append("")
    return "\r\n".join(lines) + "\r\n"
