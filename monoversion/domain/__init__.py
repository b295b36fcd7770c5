"""
Domain layer for monoversion.

Contains pure domain objects with no I/O or side effects:
- Version: Numerically ordered semantic version
- Increment: Bump level (major, minor, patch)
- Component: Independently versioned subtree
- ReleaseTag: A component's release tag
- CommitRecord: A commit message read from history
- Branch: A branch classified by its name
- PreReleaseIdentifier: Version string for in-progress branches
"""

from .version import (
    Version,
    VersionParseResult,
    parse_version,
    Increment,
    Component,
    ReleaseTag,
    CommitRecord,
)
from .branch import Branch, BranchKind, PreReleaseIdentifier

__all__ = [
    'Version',
    'VersionParseResult',
    'parse_version',
    'Increment',
    'Component',
    'ReleaseTag',
    'CommitRecord',
    'Branch',
    'BranchKind',
    'PreReleaseIdentifier',
]
