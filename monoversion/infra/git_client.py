"""
Git client infrastructure for monoversion.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from versioning logic

The client never raises for a failed git command; it returns a GitResult
and the service layer decides which failures are fatal.
"""

import subprocess
from dataclasses import dataclass
from typing import Optional, List, Tuple
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

# Separates commit bodies in `git log` output
RECORD_SEPARATOR = '\x1e'


@dataclass
class GitResult:
    """Result of one git invocation."""
    command: str
    output: str = ""
    error: str = ""
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GitClient:
    """
    Abstraction over git commands.

    Provides the version-control operations needed to resolve a
    component version: listing tags, reading the log for a range and
    path, counting commits, and creating and pushing tags.

    Example:
        client = GitClient()
        for name in client.list_tags("/path/to/repo", "api-v*"):
            print(name)
    """

    def __init__(self, timeout: Optional[int] = None):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: no timeout)
        """
        self.timeout = timeout

    def _run(self, args: List[str], cwd: str) -> GitResult:
        """
        Run a git command.

        Args:
            args: Git arguments (e.g., ['tag', '--list'])
            cwd: Working directory

        Returns:
            GitResult with stripped stdout/stderr and the exit code
        """
        cmd = ['git'] + args
        command = ' '.join(cmd)
        logger.debug(f"Running: {command}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {command}")
            return GitResult(command=command, error="timed out", returncode=-1)
        except OSError as e:
            logger.error(f"Git command failed: {command} - {e}")
            return GitResult(command=command, error=str(e), returncode=-1)

        return GitResult(
            command=command,
            output=result.stdout.strip() if result.stdout else "",
            error=result.stderr.strip() if result.stderr else "",
            returncode=result.returncode
        )

    def is_git_repo(self, path: str) -> bool:
        """Check if path is inside a git work tree."""
        if (Path(path) / ".git").exists():
            return True
        result = self._run(['rev-parse', '--is-inside-work-tree'], cwd=path)
        return result.ok and result.output == 'true'

    def list_tags(self, path: str, pattern: str) -> List[str]:
        """
        List tag names matching a glob pattern.

        Args:
            path: Path to git repository
            pattern: Glob understood by `git tag --list`

        Returns:
            Tag names in git's order (callers sort them)
        """
        result = self._run(['tag', '--list', pattern], cwd=path)
        if not result.ok or not result.output:
            return []
        return [line.strip() for line in result.output.split('\n') if line.strip()]

    def resolve_commit(self, path: str, ref: str) -> Optional[str]:
        """
        Resolve a ref (branch, tag, sha) to the commit it points to.

        Annotated tags are peeled to their commit.
        """
        result = self._run(['rev-list', '-n', '1', ref], cwd=path)
        if result.ok and result.output:
            return result.output
        return None

    def current_branch(self, path: str) -> Optional[str]:
        """Get current branch name ("HEAD" when detached)."""
        result = self._run(['rev-parse', '--abbrev-ref', 'HEAD'], cwd=path)
        if result.ok and result.output:
            return result.output
        return None

    def root_commits(self, path: str, ref: str) -> Tuple[List[Tuple[str, int]], GitResult]:
        """
        List the root (parentless) commits reachable from ref.

        Returns:
            Tuple of ([(hash, commit_timestamp), ...], GitResult)
        """
        result = self._run(['log', '--max-parents=0', '--format=%H %ct', ref], cwd=path)
        roots = []
        if result.ok and result.output:
            for line in result.output.split('\n'):
                parts = line.strip().split()
                if len(parts) != 2:
                    continue
                try:
                    roots.append((parts[0], int(parts[1])))
                except ValueError:
                    continue
        return roots, result

    def log_messages(self, path: str, revision: str, path_filter: Optional[str] = None) -> Tuple[List[str], GitResult]:
        """
        Read full commit messages for a revision range, oldest first.

        Each record is "<hash>\\n<body>", so a commit with an empty
        message still yields one (empty) message.

        Args:
            path: Path to git repository
            revision: A ref or range such as "abc123..HEAD"
            path_filter: Only commits touching this path

        Returns:
            Tuple of (messages, GitResult)
        """
        args = ['log', '--reverse', '--format=%H%n%B%x1e', revision, '--']
        if path_filter:
            args.append(path_filter)
        result = self._run(args, cwd=path)
        if not result.ok or not result.output:
            return [], result

        messages = []
        for chunk in result.output.split(RECORD_SEPARATOR):
            record = chunk.lstrip('\n')
            if not record:
                continue
            commit, _, body = record.partition('\n')
            logger.debug(f"Read commit {commit[:12]}")
            messages.append(body.strip())
        return messages, result

    def count_commits(self, path: str, revision: str) -> Optional[int]:
        """
        Count commits in a revision range.

        Returns:
            Number of commits, or None if git rejected the range
        """
        result = self._run(['rev-list', '--count', revision], cwd=path)
        if not result.ok or not result.output:
            return None
        try:
            return int(result.output)
        except ValueError:
            return None

    def create_tag(self, path: str, name: str, ref: str = "HEAD", message: Optional[str] = None) -> GitResult:
        """
        Create a tag. Fails rather than overwriting an existing tag.

        Args:
            path: Path to git repository
            name: Tag name
            ref: Commit to tag
            message: Annotation message; lightweight tag if None
        """
        args = ['tag']
        if message:
            args += ['-a', '-m', message]
        args += [name, ref]
        return self._run(args, cwd=path)

    def push_tag(self, path: str, name: str, remote: str = "origin") -> GitResult:
        """Push a single tag to a remote."""
        return self._run(['push', remote, f'refs/tags/{name}'], cwd=path)

    def delete_tag(self, path: str, name: str) -> GitResult:
        """Delete a local tag."""
        return self._run(['tag', '-d', name], cwd=path)
