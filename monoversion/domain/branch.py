"""
Branch domain objects for monoversion.

A branch is classified once per resolution from its name alone.
Pre-release identifiers are rendered for in-progress branches and are
never tagged.
"""

from dataclasses import dataclass
from enum import Enum

from .version import Version

COUNTER_WIDTH = 4


class BranchKind(Enum):
    """Kind of branch, derived from its name prefix."""
    STABLE = "stable"
    FEATURE = "feature"
    TOPIC = "topic"
    TASK = "task"
    HOTFIX = "hotfix"
    OTHER = "other"

    @property
    def is_prerelease(self) -> bool:
        """True for branches that produce a pre-release identifier."""
        return self in (BranchKind.FEATURE, BranchKind.TOPIC, BranchKind.TASK, BranchKind.HOTFIX)


@dataclass(frozen=True)
class Branch:
    """
    A classified branch.

    Attributes:
        name: Full branch name (e.g., "feature/login")
        kind: Classification of the name
        prefix: The recognized prefix that was matched, "" if none
    """

    name: str
    kind: BranchKind
    prefix: str = ""

    @property
    def short_name(self) -> str:
        """Branch name without its recognized prefix."""
        if self.prefix and self.name.startswith(self.prefix):
            return self.name[len(self.prefix):]
        return self.name


@dataclass(frozen=True)
class PreReleaseIdentifier:
    """
    Version string for a branch with unreleased work.

    Rendered as "{base}-{suffix}{commit_count:04d}", e.g. "1.1.0-login0001".
    """

    base_version: Version
    suffix: str
    commit_count: int

    def __str__(self) -> str:
        return f"{self.base_version}-{self.suffix}{self.commit_count:0{COUNTER_WIDTH}d}"
