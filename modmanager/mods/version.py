"""
Semantic version parsing and comparison.

Versions are compared after dropping build metadata (everything after the
first ``+``), so ``0.3.2+1.17`` and ``0.3.2`` are equal.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering

from modmanager.errors import MalformedVersionError

CORE_PATTERN = re.compile(r"^\d+(\.\d+)*$")
PRERELEASE_PATTERN = re.compile(r"^[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*$")


class Ordering(int, Enum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def _compare_identifier(a: str, b: str) -> int:
    # Numeric identifiers sort below alphanumeric ones
    if a.isdigit() and b.isdigit():
        return (int(a) > int(b)) - (int(a) < int(b))
    if a.isdigit():
        return -1
    if b.isdigit():
        return 1
    return (a > b) - (a < b)


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    if a == b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for left, right in zip(a, b):
        result = _compare_identifier(left, right)
        if result:
            return result
    return (len(a) > len(b)) - (len(a) < len(b))


@total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """Parsed semantic version."""

    components: tuple[int, ...]
    prerelease: tuple[str, ...] = ()
    build: str | None = field(default=None)
    raw: str = field(default="")

    def _padded(self, length: int) -> tuple[int, ...]:
        return self.components + (0,) * (length - len(self.components))

    def compare_to(self, other: "SemanticVersion") -> int:
        """Return negative, zero or positive like a classic comparator."""
        length = max(len(self.components), len(other.components))
        left, right = self._padded(length), other._padded(length)
        if left != right:
            return -1 if left < right else 1
        return _compare_prerelease(self.prerelease, other.prerelease)

    @property
    def friendly_string(self) -> str:
        """Version without build metadata."""
        text = ".".join(str(c) for c in self.components)
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        return text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare_to(other) == 0

    def __lt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        components = list(self.components)
        while len(components) > 1 and components[-1] == 0:
            components.pop()
        return hash((tuple(components), self.prerelease))

    def __str__(self) -> str:
        return self.raw or self.friendly_string


def parse_version(raw: str) -> SemanticVersion:
    """
    Parse a semantic version string.

    Args:
        raw: Version string, may carry build metadata after ``+``

    Returns:
        Parsed version

    Raises:
        MalformedVersionError: If the part before ``+`` is not a semantic version
    """
    if not isinstance(raw, str):
        raise MalformedVersionError(repr(raw), "not a string")

    head, sep, build = raw.strip().partition("+")
    core, dash, prerelease = head.partition("-")

    if not CORE_PATTERN.match(core):
        raise MalformedVersionError(raw, "expected dot-separated numbers")
    if dash and not PRERELEASE_PATTERN.match(prerelease):
        raise MalformedVersionError(raw, "invalid pre-release")

    return SemanticVersion(
        components=tuple(int(part) for part in core.split(".")),
        prerelease=tuple(prerelease.split(".")) if dash else (),
        build=build if sep else None,
        raw=raw,
    )


def try_parse_version(raw: str) -> SemanticVersion | None:
    """Parse a version, returning None when it is not comparable."""
    try:
        return parse_version(raw)
    except MalformedVersionError:
        return None


def compare(a: SemanticVersion, b: SemanticVersion) -> Ordering:
    """Compare two parsed versions."""
    result = a.compare_to(b)
    if result < 0:
        return Ordering.LESS
    if result > 0:
        return Ordering.GREATER
    return Ordering.EQUAL
