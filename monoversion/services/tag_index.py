"""
Tag index service for monoversion.

Finds a component's release tags ("{component}-v<major>.<minor>.<patch>")
and selects the newest one by numeric Version order.

Two parsing modes exist:
- Listing: tags that match the glob but not the numeric pattern are
  skipped (a stray "api-vnext" tag does not break resolution).
- Explicit: a tag named by the caller must parse, otherwise
  MalformedTagError is raised.
"""

import logging
import re
from typing import List, Optional

from ..domain.version import Component, ReleaseTag, Version, parse_version
from ..exit_codes import MalformedTagError
from ..infra.git_client import GitClient

logger = logging.getLogger(__name__)


class TagIndex:
    """
    Index of release tags for components of one repository.

    Example:
        index = TagIndex("/path/to/repo")
        latest = index.latest_version(Component("api"))
        print(latest or "untagged")
    """

    def __init__(self, repo_path: str = ".", git_client: Optional[GitClient] = None):
        """
        Initialize TagIndex.

        Args:
            repo_path: Path to git repository
            git_client: GitClient instance (creates new if None)
        """
        self.repo_path = repo_path
        self.git = git_client or GitClient()

    @staticmethod
    def _tag_pattern(component: Component) -> re.Pattern:
        return re.compile(rf'^{re.escape(component.tag_prefix)}(\d+\.\d+\.\d+)$')

    def release_tags(self, component: Component) -> List[ReleaseTag]:
        """
        List all well-formed release tags of a component.

        Returns:
            ReleaseTags sorted by Version, oldest first
        """
        pattern = self._tag_pattern(component)
        tags = []
        for name in self.git.list_tags(self.repo_path, f"{component.tag_prefix}*"):
            match = pattern.match(name)
            if not match:
                logger.debug(f"Skipping tag {name}: not a {component.name} release tag")
                continue
            result = parse_version(match.group(1))
            if not result.ok:
                logger.debug(f"Skipping tag {name}: {result.error}")
                continue
            tags.append(ReleaseTag(name=name, component=component, version=result.version))

        tags.sort(key=lambda tag: tag.version)
        return tags

    def latest_tag(self, component: Component) -> Optional[ReleaseTag]:
        """
        Get the newest release tag of a component, with its commit.

        Returns:
            ReleaseTag, or None if the component has never been released
        """
        tags = self.release_tags(component)
        if not tags:
            logger.debug(f"No release tags found for {component.name}")
            return None
        return self._with_commit(tags[-1])

    def latest_version(self, component: Component) -> Optional[Version]:
        """Get the newest released Version of a component, or None."""
        tag = self.latest_tag(component)
        return tag.version if tag else None

    def parse_tag(self, component: Component, name: str) -> ReleaseTag:
        """
        Strictly parse a tag name given by the caller.

        Args:
            component: Component the tag must belong to
            name: Tag name (e.g., "api-v1.2.3")

        Returns:
            ReleaseTag with its commit resolved

        Raises:
            MalformedTagError: If the name is not "{component}-v<X.Y.Z>"
                or the tag does not exist
        """
        if not name.startswith(component.tag_prefix):
            raise MalformedTagError(name, f"expected prefix '{component.tag_prefix}'")

        result = parse_version(name[len(component.tag_prefix):])
        if not result.ok:
            raise MalformedTagError(name, result.error)

        tag = self._with_commit(ReleaseTag(name=name, component=component, version=result.version))
        if tag.commit is None:
            raise MalformedTagError(name, "tag does not exist in this repository")
        return tag

    def _with_commit(self, tag: ReleaseTag) -> ReleaseTag:
        commit = self.git.resolve_commit(self.repo_path, f"refs/tags/{tag.name}")
        return ReleaseTag(name=tag.name, component=tag.component, version=tag.version, commit=commit)
