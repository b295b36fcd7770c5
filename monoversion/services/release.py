"""
Release driver for monoversion.

Top-level control for one resolution:

- stable (and unrecognized) branches: find the last release tag, fold
  the directives of every commit since then, optionally tag the result;
- feature/topic/task/hotfix branches: compose a pre-release identifier,
  never tag.

The driver performs no writes until the final tag step, so a failure
anywhere earlier leaves the repository untouched.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import get_increment, load_config
from ..domain.branch import Branch
from ..domain.version import CommitRecord, Component, Increment, ReleaseTag, Version
from ..exit_codes import HistoryReadError, TagCreationError, TagPushError
from ..infra.git_client import GitClient
from .accumulator import VersionBumper
from .directives import parse_directive
from .history import Baseline, HistoryReader
from .prerelease import BranchClassifier, PreReleaseComposer
from .tag_index import TagIndex

logger = logging.getLogger(__name__)


@dataclass
class Calculation:
    """Result of the finalize algorithm for one component and ref."""
    component: Component
    target_ref: str
    baseline: Baseline
    start: Version
    version: Version
    commits: List[CommitRecord] = field(default_factory=list)
    increments: List[Increment] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.commits)


@dataclass
class Resolution:
    """
    Outcome of ReleaseDriver.resolve.

    version is the string written to stdout; everything else explains
    how it was reached.
    """
    component: Component
    version: str
    branch: Branch
    prerelease: bool
    baseline_tag: Optional[str] = None
    baseline_commit: Optional[str] = None
    commits: List[CommitRecord] = field(default_factory=list)
    increments: List[Increment] = field(default_factory=list)
    tag_created: Optional[str] = None
    tag_pushed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'component': self.component.name,
            'version': self.version,
            'branch': self.branch.name,
            'kind': self.branch.kind.value,
            'prerelease': self.prerelease,
            'baseline_tag': self.baseline_tag,
            'baseline_commit': self.baseline_commit,
            'commits': len(self.commits),
            'increments': [increment.value for increment in self.increments],
        }
        if self.tag_created:
            result['tag'] = self.tag_created
            result['pushed'] = self.tag_pushed
        return result


class ReleaseDriver:
    """
    Resolves component versions from git history.

    Example:
        driver = ReleaseDriver("/path/to/repo")
        resolution = driver.resolve(Component("api"), create_tag=True)
        print(resolution.version)
    """

    def __init__(
        self,
        repo_path: str = ".",
        config: Optional[Dict[str, Any]] = None,
        git_client: Optional[GitClient] = None,
        classifier: Optional[BranchClassifier] = None,
    ):
        """
        Initialize ReleaseDriver.

        Args:
            repo_path: Path to git repository
            config: Configuration dict (loads default if None)
            git_client: GitClient instance (creates new if None)
            classifier: BranchClassifier (built from config if None)
        """
        self.repo_path = repo_path
        self.config = config if config is not None else load_config()
        self.git = git_client or GitClient(timeout=self.config.get('git', {}).get('timeout'))
        self.tags = TagIndex(repo_path, self.git)
        self.history = HistoryReader(repo_path, self.git)
        self.classifier = classifier or BranchClassifier.from_config(self.config)
        self.composer = PreReleaseComposer(
            self,
            self.history,
            self.classifier,
            stable_ref=self.config.get('branches', {}).get('stable_ref'),
        )

    def _default_increment(self) -> Increment:
        return get_increment(self.config, 'default')

    def calculate(
        self,
        component: Component,
        target_ref: str = "HEAD",
        default_increment: Optional[Increment] = None,
        from_tag: Optional[str] = None,
    ) -> Calculation:
        """
        Compute the release version of component at target_ref.

        Args:
            component: Component to resolve
            target_ref: Ref whose history is read
            default_increment: Increment for commits without a directive
            from_tag: Explicit baseline tag; parsed strictly

        Returns:
            Calculation with baseline, commits and resulting version

        Raises:
            MalformedTagError: If from_tag is not a valid release tag
            HistoryReadError: If git history cannot be read
        """
        default_increment = default_increment or self._default_increment()

        if from_tag:
            tag: Optional[ReleaseTag] = self.tags.parse_tag(component, from_tag)
        else:
            tag = self.tags.latest_tag(component)

        baseline = self.history.baseline_for(tag, target_ref)
        start = tag.version if tag else Version(0, 0, 0)
        commits = self.history.messages_since(baseline, target_ref, component)
        if baseline.is_root and not commits:
            logger.warning(
                f"No commits on {target_ref} touch '{component.history_path}'; "
                f"check the component name or --path"
            )
        increments = [parse_directive(record.message, default_increment) for record in commits]
        version = VersionBumper.accumulate(start, increments)

        logger.debug(
            f"{component.name}: {tag.name if tag else 'untagged'} + "
            f"{len(commits)} commits on {target_ref} -> {version}"
        )
        return Calculation(
            component=component,
            target_ref=target_ref,
            baseline=baseline,
            start=start,
            version=version,
            commits=commits,
            increments=increments,
        )

    def current_branch(self, branch: Optional[str] = None) -> Branch:
        """Classify branch, or the checked-out branch if not given."""
        name = branch or self.git.current_branch(self.repo_path)
        if not name:
            raise HistoryReadError("Cannot determine the current branch")
        return self.classifier.classify(name)

    def resolve(
        self,
        component: Component,
        default_increment: Optional[Increment] = None,
        create_tag: bool = False,
        target_ref: str = "HEAD",
        branch: Optional[str] = None,
        from_tag: Optional[str] = None,
        dry_run: bool = False,
    ) -> Resolution:
        """
        Resolve the version string for component.

        Args:
            component: Component to resolve
            default_increment: Increment for commits without a directive
            create_tag: Tag (and push) a new release version
            target_ref: Ref to resolve (default: HEAD)
            branch: Branch name override (default: checked-out branch)
            from_tag: Explicit baseline tag for the finalize path
            dry_run: Report the tag that would be created without creating it

        Returns:
            Resolution; its version is the string to print

        Raises:
            VersioningError: On malformed tags, unreadable history, or
                failed tag creation/push
        """
        if not self.git.is_git_repo(self.repo_path):
            raise HistoryReadError(f"{self.repo_path} is not a git repository")

        default_increment = default_increment or self._default_increment()
        current = self.current_branch(branch)
        logger.debug(f"Branch {current.name} classified as {current.kind.value}")

        if current.kind.is_prerelease:
            if create_tag:
                logger.info(f"Not tagging: {current.name} produces a pre-release version")
            prerelease = self.composer.compose(component, current, target_ref, default_increment)
            stable_tag = prerelease.stable.baseline.tag
            return Resolution(
                component=component,
                version=prerelease.version,
                branch=current,
                prerelease=True,
                baseline_tag=stable_tag.name if stable_tag else None,
                baseline_commit=prerelease.stable.baseline.commit,
                commits=prerelease.commits,
                increments=[prerelease.increment],
            )

        calculation = self.calculate(component, target_ref, default_increment, from_tag)
        baseline_tag = calculation.baseline.tag
        resolution = Resolution(
            component=component,
            version=str(calculation.version),
            branch=current,
            prerelease=False,
            baseline_tag=baseline_tag.name if baseline_tag else None,
            baseline_commit=calculation.baseline.commit,
            commits=calculation.commits,
            increments=calculation.increments,
        )

        if not calculation.has_changes:
            logger.info(f"No changes to {component.name} since {resolution.baseline_tag or 'root'}")
            return resolution

        if create_tag:
            self._release(resolution, calculation.version, target_ref, dry_run)
        return resolution

    def _release(self, resolution: Resolution, version: Version, target_ref: str, dry_run: bool) -> None:
        """Create the release tag and push it to the shared remote."""
        tag_config = self.config.get('tags', {})
        remote = tag_config.get('remote', 'origin')
        push = tag_config.get('push', True)
        name = resolution.component.tag_name(version)
        message = f"Release {resolution.component.name} {version}" if tag_config.get('annotate') else None

        if dry_run:
            logger.info(f"Would create tag {name} at {target_ref}" + (f" and push to {remote}" if push else ""))
            return

        result = self.git.create_tag(self.repo_path, name, target_ref, message)
        if not result.ok:
            raise TagCreationError(name, result.error)
        resolution.tag_created = name
        logger.info(f"Created tag {name}")

        if not push:
            return

        result = self.git.push_tag(self.repo_path, name, remote)
        if not result.ok:
            # Remove the local tag so a rerun retries the release
            self.git.delete_tag(self.repo_path, name)
            raise TagPushError(name, remote, result.error)
        resolution.tag_pushed = True
        logger.info(f"Pushed tag {name} to {remote}")
