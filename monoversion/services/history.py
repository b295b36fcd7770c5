"""
Commit history reader for monoversion.

Reads the messages of commits that touched a component's path between
a baseline commit and a target ref, oldest first.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..domain.version import CommitRecord, Component, ReleaseTag
from ..exit_codes import HistoryReadError
from ..infra.git_client import GitClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Baseline:
    """
    Where a component's history starts.

    Attributes:
        commit: Commit the last release tag points to, or the root commit
        tag: The release tag, None when the component is untagged
    """
    commit: str
    tag: Optional[ReleaseTag] = None

    @property
    def is_root(self) -> bool:
        return self.tag is None


class HistoryReader:
    """
    Reads component history from git.

    Every call re-reads git; results are not cached.
    """

    def __init__(self, repo_path: str = ".", git_client: Optional[GitClient] = None):
        self.repo_path = repo_path
        self.git = git_client or GitClient()

    def root_commit(self, target_ref: str = "HEAD") -> str:
        """
        Pick the root commit of target_ref.

        When history has several roots (e.g. merged unrelated histories),
        the one with the earliest commit time wins, ties broken by hash.

        Raises:
            HistoryReadError: If target_ref cannot be read
        """
        roots, result = self.git.root_commits(self.repo_path, target_ref)
        if not result.ok:
            raise HistoryReadError(f"Cannot find root commit of '{target_ref}'", result.command, result.error)
        if not roots:
            raise HistoryReadError(f"No commits reachable from '{target_ref}'", result.command)
        if len(roots) > 1:
            logger.debug(f"{len(roots)} root commits reachable from {target_ref}; using the earliest")
        commit, _ = min(roots, key=lambda root: (root[1], root[0]))
        return commit

    def baseline_for(self, tag: Optional[ReleaseTag], target_ref: str = "HEAD") -> Baseline:
        """Baseline for a component whose latest release tag is tag (or None)."""
        if tag is not None and tag.commit:
            return Baseline(commit=tag.commit, tag=tag)
        return Baseline(commit=self.root_commit(target_ref))

    def messages_since(
        self,
        baseline: Baseline,
        target_ref: str,
        component: Component
    ) -> List[CommitRecord]:
        """
        Read commit messages touching the component since baseline.

        A tagged baseline is exclusive (the released commit is not read
        again). A root baseline is inclusive; since a root has no parents,
        that is every commit reachable from target_ref.

        Args:
            baseline: Where history starts
            target_ref: Ref whose history is read
            component: Component whose path filters the log

        Returns:
            CommitRecords, oldest first; empty if nothing changed

        Raises:
            HistoryReadError: If git rejects the ref, range or path
        """
        revision = target_ref if baseline.is_root else f"{baseline.commit}..{target_ref}"
        return self.read(revision, component.history_path)

    def read(self, revision: str, path_filter: Optional[str] = None) -> List[CommitRecord]:
        """Read commit messages for a revision range, oldest first."""
        messages, result = self.git.log_messages(self.repo_path, revision, path_filter)
        if not result.ok:
            raise HistoryReadError(f"Cannot read history for '{revision}'", result.command, result.error)

        records = [CommitRecord(message=message, order=index) for index, message in enumerate(messages)]
        logger.debug(f"{len(records)} commits in {revision} touching {path_filter or '.'}")
        return records

    def count_unique(self, branch_ref: str, stable_ref: str) -> int:
        """
        Count commits on branch_ref that are not on stable_ref.

        Raises:
            HistoryReadError: If either ref cannot be read
        """
        revision = f"{stable_ref}..{branch_ref}"
        count = self.git.count_commits(self.repo_path, revision)
        if count is None:
            raise HistoryReadError(f"Cannot count commits in '{revision}'")
        return count
