"""
Branch classification and pre-release composition for monoversion.

Branches whose names signal unreleased work (feature/, topic/, task/,
hotfix/) do not get a release version. Instead they get a pre-release
identifier built from:

1. the version the stable branch would release right now,
2. one bump by the highest directive on the branch (or the kind's default),
3. a suffix taken from the branch name,
4. the number of commits on the branch that are not on stable.

For example, "feature/login" with one "+semver: minor" commit over a
stable 1.0.0 resolves to "1.1.0-login0001". These identifiers are never
tagged.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

from ..config import get_increment
from ..domain.branch import Branch, BranchKind, PreReleaseIdentifier
from ..domain.version import CommitRecord, Component, Increment
from .accumulator import VersionBumper
from .directives import highest_directive
from .history import HistoryReader

if TYPE_CHECKING:
    from .release import Calculation, ReleaseDriver

logger = logging.getLogger(__name__)

DEFAULT_STABLE_BRANCH = "main"
DEFAULT_FEATURE_PREFIXES = ("feature/", "topic/", "task/")
DEFAULT_HOTFIX_PREFIXES = ("hotfix/",)
SUFFIX_MAX_LENGTH = 10

_UNSAFE_SUFFIX_CHARS = re.compile(r'[^0-9A-Za-z-]')


def sanitize_suffix(name: str, max_length: int = SUFFIX_MAX_LENGTH) -> str:
    """
    Turn a branch name (prefix already stripped) into a pre-release suffix.

    Characters outside [0-9A-Za-z-] become "-", and the result is cut to
    max_length characters.

    Examples:
        sanitize_suffix("login")              -> "login"
        sanitize_suffix("JIRA_123/fix")       -> "JIRA-123-f"
    """
    suffix = _UNSAFE_SUFFIX_CHARS.sub('-', name)[:max_length]
    return suffix or "branch"


class BranchClassifier:
    """
    Classifies branches by name prefix.

    The stable branch name is a single configuration value passed in
    here; nothing else in monoversion compares against "main".
    """

    def __init__(
        self,
        stable_branch: str = DEFAULT_STABLE_BRANCH,
        feature_prefixes: Iterable[str] = DEFAULT_FEATURE_PREFIXES,
        hotfix_prefixes: Iterable[str] = DEFAULT_HOTFIX_PREFIXES,
        feature_increment: Increment = Increment.MINOR,
        hotfix_increment: Increment = Increment.PATCH,
    ):
        self.stable_branch = stable_branch
        self.feature_increment = feature_increment
        self.hotfix_increment = hotfix_increment

        self._prefixes: Dict[str, BranchKind] = {}
        for prefix in feature_prefixes:
            self._prefixes[prefix] = self._kind_for_prefix(prefix)
        for prefix in hotfix_prefixes:
            self._prefixes[prefix] = BranchKind.HOTFIX
        # Longest prefix first so "feature/ui/" beats "feature/"
        self._ordered = sorted(self._prefixes, key=len, reverse=True)

    @staticmethod
    def _kind_for_prefix(prefix: str) -> BranchKind:
        try:
            kind = BranchKind(prefix.rstrip('/'))
        except ValueError:
            return BranchKind.FEATURE
        return kind if kind.is_prerelease and kind is not BranchKind.HOTFIX else BranchKind.FEATURE

    @classmethod
    def from_config(cls, config: dict) -> 'BranchClassifier':
        """Build a classifier from the "branches" and "increments" config sections."""
        branches = config.get('branches', {})
        feature_prefixes = branches.get('feature_prefixes', DEFAULT_FEATURE_PREFIXES)
        hotfix_prefixes = branches.get('hotfix_prefixes', DEFAULT_HOTFIX_PREFIXES)
        # Environment overrides arrive as comma-separated strings
        if isinstance(feature_prefixes, str):
            feature_prefixes = [p.strip() for p in feature_prefixes.split(',') if p.strip()]
        if isinstance(hotfix_prefixes, str):
            hotfix_prefixes = [p.strip() for p in hotfix_prefixes.split(',') if p.strip()]
        return cls(
            stable_branch=branches.get('stable', DEFAULT_STABLE_BRANCH),
            feature_prefixes=feature_prefixes,
            hotfix_prefixes=hotfix_prefixes,
            feature_increment=get_increment(config, 'feature', 'minor'),
            hotfix_increment=get_increment(config, 'hotfix', 'patch'),
        )

    def classify(self, name: str) -> Branch:
        """
        Classify a branch name.

        Names matching no prefix and not equal to the stable branch are
        OTHER, which resolves exactly like the stable branch.
        """
        if name == self.stable_branch:
            return Branch(name=name, kind=BranchKind.STABLE)
        for prefix in self._ordered:
            if name.startswith(prefix):
                return Branch(name=name, kind=self._prefixes[prefix], prefix=prefix)
        return Branch(name=name, kind=BranchKind.OTHER)

    def default_increment(self, branch: Branch) -> Increment:
        """Increment used on a pre-release branch without explicit directives."""
        if branch.kind is BranchKind.HOTFIX:
            return self.hotfix_increment
        return self.feature_increment


@dataclass
class PreRelease:
    """Outcome of composing a pre-release identifier."""
    identifier: PreReleaseIdentifier
    branch: Branch
    increment: Increment
    explicit: bool
    stable: 'Calculation'
    commits: List[CommitRecord] = field(default_factory=list)

    @property
    def version(self) -> str:
        return str(self.identifier)


class PreReleaseComposer:
    """
    Composes pre-release identifiers for in-progress branches.

    The stable base version is computed by the release driver's
    finalize algorithm, run against the stable ref.
    """

    def __init__(
        self,
        driver: 'ReleaseDriver',
        history: HistoryReader,
        classifier: BranchClassifier,
        stable_ref: Optional[str] = None,
    ):
        self.driver = driver
        self.history = history
        self.classifier = classifier
        self.stable_ref = stable_ref or classifier.stable_branch

    def compose(
        self,
        component: Component,
        branch: Branch,
        branch_ref: str = "HEAD",
        stable_increment: Increment = Increment.PATCH,
    ) -> PreRelease:
        """
        Build the pre-release identifier for component on branch.

        Args:
            component: Component being resolved
            branch: Classified pre-release branch
            branch_ref: Ref holding the branch's commits
            stable_increment: Default increment for the stable calculation

        Returns:
            PreRelease with the rendered identifier

        Raises:
            HistoryReadError: If the stable ref or branch cannot be read
        """
        stable = self.driver.calculate(component, self.stable_ref, stable_increment)
        logger.debug(f"Stable {self.stable_ref} resolves {component.name} to {stable.version}")

        commit_count = self.history.count_unique(branch_ref, self.stable_ref)
        commits = self.history.read(f"{self.stable_ref}..{branch_ref}", component.history_path)

        increment = highest_directive(record.message for record in commits)
        explicit = increment is not None
        if increment is None:
            increment = self.classifier.default_increment(branch)
        logger.debug(
            f"Branch {branch.name}: {commit_count} unique commits, "
            f"{'explicit' if explicit else 'default'} increment {increment.value}"
        )

        identifier = PreReleaseIdentifier(
            base_version=VersionBumper.apply(stable.version, increment),
            suffix=sanitize_suffix(branch.short_name),
            commit_count=commit_count,
        )
        return PreRelease(
            identifier=identifier,
            branch=branch,
            increment=increment,
            explicit=explicit,
            stable=stable,
            commits=commits,
        )
