"""Bundle versions — ``major.minor.micro.qualifier``.

Ordering is numeric on the first three parts, then plain string order on the
qualifier. An empty qualifier therefore sorts before any other, so
``1.0.0 < 1.0.0.beta``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from bundlekit.domain.errors import VersionFormatError

_NUMBER = re.compile(r"[0-9]+")
_QUALIFIER = re.compile(r"[A-Za-z0-9_-]*")


@dataclass(frozen=True, order=True)
class Version:
    """A four-part bundle version. Field order is the comparison order."""

    major: int = 0
    minor: int = 0
    micro: int = 0
    qualifier: str = ""

    EMPTY: ClassVar[Version]

    def __post_init__(self) -> None:
        for part in ("major", "minor", "micro"):
            value = getattr(self, part)
            if isinstance(value, bool) or not isinstance(value, int):
                raise VersionFormatError(str(value), f"{part} must be an integer")
            if value < 0:
                raise VersionFormatError(str(value), f"negative {part}")
        if not isinstance(self.qualifier, str) or not _QUALIFIER.fullmatch(self.qualifier):
            raise VersionFormatError(str(self.qualifier), "invalid qualifier")

    @classmethod
    def parse(cls, text: str | None) -> Version:
        """Parse ``major[.minor[.micro[.qualifier]]]``.

        Surrounding whitespace is ignored and empty text (or ``None``) is
        :attr:`EMPTY`. A qualifier is only accepted after all three numeric
        parts.

        Raises:
            VersionFormatError: If *text* is not a valid version.
        """
        if text is None:
            return cls.EMPTY
        stripped = text.strip()
        if not stripped:
            return cls.EMPTY

        parts = stripped.split(".")
        if len(parts) > 4:
            raise VersionFormatError(text, "too many components")

        numbers: list[int] = []
        for raw in parts[:3]:
            if not _NUMBER.fullmatch(raw):
                raise VersionFormatError(text, f"non-numeric component {raw!r}")
            numbers.append(int(raw))
        while len(numbers) < 3:
            numbers.append(0)

        qualifier = ""
        if len(parts) == 4:
            qualifier = parts[3]
            if not qualifier:
                raise VersionFormatError(text, "empty qualifier")

        try:
            return cls(numbers[0], numbers[1], numbers[2], qualifier)
        except VersionFormatError as exc:
            raise VersionFormatError(text, exc.reason) from exc

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.micro}"
        if self.qualifier:
            return f"{base}.{self.qualifier}"
        return base


Version.EMPTY = Version()
