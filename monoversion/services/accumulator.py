"""
Version accumulation for monoversion.

Applies commit directives to a starting Version, one bump per commit,
in chronological order:

- major: X+1.0.0
- minor: x.Y+1.0
- patch: x.y.Z+1

Directives are not collapsed: five patch commits on 1.0.0 give 1.0.5.
"""

from typing import Iterable

from ..domain.version import Increment, Version


class VersionBumper:
    """Bump semantic versions."""

    @staticmethod
    def bump_major(version: Version) -> Version:
        """Bump major version (X.0.0)."""
        return Version(version.major + 1, 0, 0)

    @staticmethod
    def bump_minor(version: Version) -> Version:
        """Bump minor version (x.Y.0)."""
        return Version(version.major, version.minor + 1, 0)

    @staticmethod
    def bump_patch(version: Version) -> Version:
        """Bump patch version (x.y.Z)."""
        return Version(version.major, version.minor, version.patch + 1)

    @classmethod
    def apply(cls, version: Version, increment: Increment) -> Version:
        """Apply a single increment."""
        if increment is Increment.MAJOR:
            return cls.bump_major(version)
        if increment is Increment.MINOR:
            return cls.bump_minor(version)
        return cls.bump_patch(version)

    @classmethod
    def accumulate(cls, start: Version, increments: Iterable[Increment]) -> Version:
        """
        Fold increments left to right over start.

        Args:
            start: Version before the first increment
            increments: Increments in commit order

        Returns:
            Version after every increment was applied
        """
        version = start
        for increment in increments:
            version = cls.apply(version, increment)
        return version
