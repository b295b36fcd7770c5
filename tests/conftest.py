"""Shared fixtures: throwaway git repositories for end-to-end tests."""

import os
import subprocess
from pathlib import Path

import pytest

from monoversion.config import get_default_config


class GitRepo:
    """A scratch repository with an optional bare "origin" remote."""

    def __init__(self, path: Path):
        self.path = path
        self._tick = 0

    def git(self, *args: str) -> str:
        # Distinct, increasing commit times keep ordering deterministic
        self._tick += 1
        stamp = f"{1700000000 + self._tick} +0000"
        env = dict(os.environ, GIT_AUTHOR_DATE=stamp, GIT_COMMITTER_DATE=stamp)
        result = subprocess.run(
            ['git', *args], cwd=self.path, capture_output=True, text=True, env=env, check=True
        )
        return result.stdout.strip()

    def commit(self, message: str, *files: str) -> str:
        """Touch files (relative paths) and commit them."""
        for name in files:
            target = self.path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, 'a') as f:
                f.write(f"{message}\n")
            self.git('add', name)
        if not files:
            self.git('commit', '--allow-empty', '-m', message)
        else:
            self.git('commit', '--allow-empty-message', '-m', message)
        return self.git('rev-parse', 'HEAD')

    def tag(self, name: str, ref: str = 'HEAD'):
        self.git('tag', name, ref)

    def checkout(self, branch: str, create: bool = False):
        if create:
            self.git('checkout', '-b', branch)
        else:
            self.git('checkout', branch)

    def tags(self):
        output = self.git('tag', '--list')
        return output.split('\n') if output else []

    def remote_tags(self):
        output = self.git('ls-remote', '--tags', 'origin')
        return [line.split('refs/tags/', 1)[1] for line in output.split('\n') if line]


@pytest.fixture
def git_repo(tmp_path):
    """An empty repository on branch "main" with a bare origin."""
    origin = tmp_path / 'origin.git'
    subprocess.run(['git', 'init', '--bare', str(origin)], capture_output=True, check=True)

    repo = GitRepo(tmp_path / 'repo')
    repo.path.mkdir()
    repo.git('init')
    repo.git('checkout', '-b', 'main')
    repo.git('config', 'user.name', 'Test User')
    repo.git('config', 'user.email', 'test@example.com')
    repo.git('config', 'commit.gpgsign', 'false')
    repo.git('config', 'tag.gpgsign', 'false')
    repo.git('remote', 'add', 'origin', str(origin))
    return repo


@pytest.fixture
def config():
    return get_default_config()
