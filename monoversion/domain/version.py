"""
Version domain objects for monoversion.

Value types used by one resolution run:
- Version: major/minor/patch triple ordered numerically
- Increment: the bump level a commit directive selects
- Component: a subtree of the repository with its own tag namespace
- ReleaseTag: a component tag that parsed into a Version
- CommitRecord: one commit message read from history

All objects are immutable. Nothing here performs I/O.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

VERSION_PATTERN = re.compile(r'^(\d+)\.(\d+)\.(\d+)$')


class Increment(Enum):
    """Bump level selected by a commit directive."""
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def severity(self) -> int:
        """Rank used to pick the highest directive (major > minor > patch)."""
        return _SEVERITY[self]

    @classmethod
    def from_name(cls, name: str) -> 'Increment':
        """
        Look up an increment by its lowercase name.

        Raises:
            ValueError: If the name is not major, minor or patch
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown increment '{name}' (expected major, minor or patch)"
            ) from None


_SEVERITY = {
    Increment.PATCH: 1,
    Increment.MINOR: 2,
    Increment.MAJOR: 3,
}


@dataclass(frozen=True, order=True)
class Version:
    """
    Semantic version triple.

    Ordering is the dataclass field order over integers, so
    Version(10, 0, 0) > Version(9, 0, 0).
    """

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self):
        for name in ('major', 'minor', 'patch'):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"Version {name} must be a non-negative integer, got {value!r}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> 'Version':
        """
        Parse "X.Y.Z" into a Version.

        Raises:
            ValueError: If text is not a plain numeric triple
        """
        result = parse_version(text)
        if not result.ok:
            raise ValueError(result.error)
        return result.version


@dataclass(frozen=True)
class VersionParseResult:
    """Outcome of parse_version: either a Version or an error message."""

    version: Optional[Version] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.version is not None


def parse_version(text: str) -> VersionParseResult:
    """
    Strictly parse a "major.minor.patch" string.

    Never raises; callers decide whether a failure is fatal.

    Args:
        text: Candidate version string (no "v" prefix)

    Returns:
        VersionParseResult with either version or error set
    """
    if text is None:
        return VersionParseResult(error="empty version string")
    match = VERSION_PATTERN.match(text.strip())
    if not match:
        return VersionParseResult(error=f"'{text}' is not of the form <major>.<minor>.<patch>")
    major, minor, patch = (int(part) for part in match.groups())
    return VersionParseResult(version=Version(major, minor, patch))


@dataclass(frozen=True)
class Component:
    """
    An independently versioned subtree of the repository.

    Attributes:
        name: Tag namespace, used as "{name}-v{version}"
        path: Path filter for history (defaults to the name)
    """

    name: str
    path: Optional[str] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Component name must not be empty")

    @property
    def history_path(self) -> str:
        return self.path if self.path else self.name

    @property
    def tag_prefix(self) -> str:
        return f"{self.name}-v"

    def tag_name(self, version: Version) -> str:
        return f"{self.tag_prefix}{version}"


@dataclass(frozen=True)
class ReleaseTag:
    """A release tag of one component."""

    name: str
    component: Component
    version: Version
    commit: Optional[str] = None


@dataclass(frozen=True)
class CommitRecord:
    """One commit message read from history, oldest first by order."""

    message: str
    order: int

    @property
    def subject(self) -> str:
        return self.message.splitlines()[0] if self.message else ""
