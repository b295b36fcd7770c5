"""
Tests for the monoversion command line.

Commands run through click's CliRunner against real scratch repositories.
"""

import json

import pytest
from click.testing import CliRunner

from monoversion.cli import cli
from monoversion.exit_codes import DATA_ERROR, HISTORY_ERROR, CONFIG_ERROR


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CliRunner isolated from the user's configuration."""
    monkeypatch.delenv('MONOVERSION_CONFIG', raising=False)
    monkeypatch.setenv('HOME', str(tmp_path / 'home'))
    return CliRunner()


@pytest.fixture
def repo(git_repo, monkeypatch):
    git_repo.commit("Start", "api/main.py")
    git_repo.tag("api-v1.0.0")
    monkeypatch.chdir(git_repo.path)
    return git_repo


class TestResolveCommand:
    """Tests for `monoversion resolve`."""

    def test_prints_only_version(self, runner, repo):
        repo.commit("Add endpoint +semver: minor", "api/main.py")

        result = runner.invoke(cli, ['resolve', 'api'])

        assert result.exit_code == 0
        assert result.output == "1.1.0\n"

    def test_no_changes(self, runner, repo):
        result = runner.invoke(cli, ['resolve', 'api', '--tag'])

        assert result.exit_code == 0
        assert result.output == "1.0.0\n"
        assert repo.tags() == ["api-v1.0.0"]

    def test_increment_option(self, runner, repo):
        repo.commit("Change", "api/main.py")

        result = runner.invoke(cli, ['resolve', 'api', '--increment', 'major'])

        assert result.output == "2.0.0\n"

    def test_invalid_increment_is_usage_error(self, runner, repo):
        result = runner.invoke(cli, ['resolve', 'api', '--increment', 'huge'])

        assert result.exit_code == 2

    def test_path_option(self, runner, repo):
        repo.commit("Service change", "services/api/handler.py")

        assert runner.invoke(cli, ['resolve', 'api']).output == "1.0.0\n"
        assert runner.invoke(cli, ['resolve', 'api', '--path', 'services/api']).output == "1.0.1\n"

    def test_tag_option(self, runner, repo):
        repo.commit("Fix", "api/main.py")

        result = runner.invoke(cli, ['resolve', 'api', '--tag'])

        assert result.exit_code == 0
        assert result.output == "1.0.1\n"
        assert "api-v1.0.1" in repo.remote_tags()

    def test_dry_run(self, runner, repo):
        repo.commit("Fix", "api/main.py")

        result = runner.invoke(cli, ['resolve', 'api', '--tag', '--dry-run'])

        assert result.output == "1.0.1\n"
        assert repo.tags() == ["api-v1.0.0"]

    def test_branch_override(self, runner, repo):
        repo.commit("Fix", "api/main.py")

        result = runner.invoke(cli, ['resolve', 'api', '--branch', 'feature/login'])

        # main resolves to 1.0.1; HEAD is main, so no commits are unique
        assert result.output == "1.1.0-login0000\n"

    def test_stable_option(self, runner, repo):
        repo.git('branch', '-m', 'main', 'trunk')
        repo.checkout("feature/x", create=True)
        repo.commit("X", "api/x.py")

        result = runner.invoke(cli, ['resolve', 'api', '--stable', 'trunk'])

        assert result.output == "1.1.0-x0001\n"

    def test_json_output(self, runner, repo):
        repo.commit("Fix", "api/main.py")

        result = runner.invoke(cli, ['resolve', 'api', '--json'])
        data = json.loads(result.output)

        assert data['version'] == "1.0.1"
        assert data['baseline_tag'] == "api-v1.0.0"
        assert data['commits'] == 1

    def test_explain(self, runner, repo):
        repo.commit("Fix parser", "api/main.py")

        result = runner.invoke(cli, ['resolve', 'api', '--explain'])

        assert result.exit_code == 0
        assert result.output.splitlines()[-1] == "1.0.1"

    def test_malformed_from_tag(self, runner, repo):
        result = runner.invoke(cli, ['resolve', 'api', '--from-tag', 'api-vbad'])

        assert result.exit_code == DATA_ERROR
        assert "Malformed release tag" in result.output

    def test_bad_ref(self, runner, repo):
        result = runner.invoke(cli, ['resolve', 'api', '--ref', 'nope'])

        assert result.exit_code == HISTORY_ERROR

    def test_bad_config(self, runner, repo):
        (repo.path / '.monoversion.json').write_text('{oops')

        result = runner.invoke(cli, ['resolve', 'api'])

        assert result.exit_code == CONFIG_ERROR

    def test_bad_increment_setting(self, runner, repo, monkeypatch):
        monkeypatch.setenv('MONOVERSION_INCREMENTS_DEFAULT', 'huge')

        result = runner.invoke(cli, ['resolve', 'api'])

        assert result.exit_code == CONFIG_ERROR
        assert 'increments.default' in result.output

    def test_repo_option(self, runner, git_repo, tmp_path, monkeypatch):
        git_repo.commit("Start", "web/a.py")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ['resolve', 'web', '--repo', str(git_repo.path)])

        assert result.output == "0.0.1\n"


    def test_not_a_repository(self, runner, tmp_path, monkeypatch):
        plain = tmp_path / "plain"
        plain.mkdir()
        monkeypatch.chdir(plain)

        result = runner.invoke(cli, ['resolve', 'api'])

        assert result.exit_code == HISTORY_ERROR


class TestTagsCommand:
    """Tests for `monoversion tags`."""

    def test_json_numeric_order(self, runner, repo):
        repo.tag("api-v10.0.0")
        repo.tag("api-v9.0.0")
        repo.tag("api-vnext")

        result = runner.invoke(cli, ['tags', 'api', '--json'])
        versions = [json.loads(line)['version'] for line in result.output.splitlines()]

        assert versions == ["1.0.0", "9.0.0", "10.0.0"]

    def test_latest(self, runner, repo):
        repo.tag("api-v10.0.0")

        result = runner.invoke(cli, ['tags', 'api', '--latest', '--json'])

        assert json.loads(result.output)['tag'] == "api-v10.0.0"

    def test_none(self, runner, repo):
        result = runner.invoke(cli, ['tags', 'web'])

        assert result.exit_code == 0
        assert "No release tags for web" in result.output

    def test_table(self, runner, repo):
        result = runner.invoke(cli, ['tags', 'api'])

        assert result.exit_code == 0
        assert "api-v1.0.0" in result.output


class TestConfigCommand:
    """Tests for `monoversion config`."""

    def test_show(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ['config', 'show'])

        assert json.loads(result.output)['branches']['stable'] == "main"

    def test_show_path(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ['config', 'show', '--path'])

        assert json.loads(result.output)['config_path'].endswith('config.json')

    def test_init_then_show(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ['config', 'init'])
        assert result.exit_code == 0
        assert (tmp_path / '.monoversion.toml').exists()

        result = runner.invoke(cli, ['config', 'show', '--pretty'])
        assert json.loads(result.output)['increments']['feature'] == "minor"

    def test_init_refuses_overwrite(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / '.monoversion.toml').write_text('')

        result = runner.invoke(cli, ['config', 'init'])

        assert result.exit_code != 0
