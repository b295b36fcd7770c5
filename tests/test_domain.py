"""Tests for the domain layer."""

import pytest

from monoversion.domain import (
    Version,
    VersionParseResult,
    parse_version,
    Increment,
    Component,
    CommitRecord,
    Branch,
    BranchKind,
    PreReleaseIdentifier,
)


class TestVersion:
    """Tests for Version value object."""

    def test_str(self):
        """Test rendering as major.minor.patch."""
        assert str(Version(1, 2, 3)) == "1.2.3"
        assert str(Version()) == "0.0.0"

    def test_numeric_ordering(self):
        """Test that components compare as integers, not strings."""
        assert Version(10, 0, 0) > Version(9, 0, 0)
        assert Version(1, 10, 0) > Version(1, 9, 0)
        assert Version(1, 0, 10) > Version(1, 0, 9)
        assert max([Version(9, 0, 0), Version(10, 0, 0), Version(2, 5, 5)]) == Version(10, 0, 0)

    def test_ordering_is_lexicographic_over_fields(self):
        """Test major dominates minor, minor dominates patch."""
        assert Version(2, 0, 0) > Version(1, 99, 99)
        assert Version(1, 2, 0) > Version(1, 1, 99)

    def test_equality_and_hash(self):
        """Test Versions are value objects."""
        assert Version(1, 2, 3) == Version(1, 2, 3)
        assert len({Version(1, 2, 3), Version(1, 2, 3)}) == 1

    def test_rejects_negative(self):
        """Test negative components are invalid."""
        with pytest.raises(ValueError):
            Version(-1, 0, 0)

    def test_parse(self):
        """Test raising parse wrapper."""
        assert Version.parse("10.20.30") == Version(10, 20, 30)
        with pytest.raises(ValueError):
            Version.parse("1.2")


class TestParseVersion:
    """Tests for the non-raising version parser."""

    def test_valid(self):
        result = parse_version("1.2.3")
        assert result.ok
        assert result.version == Version(1, 2, 3)
        assert result.error is None

    @pytest.mark.parametrize("text", ["1.2", "1.2.3.4", "v1.2.3", "1.2.x", "", "1.2.3-rc1"])
    def test_invalid(self, text):
        """Test malformed strings produce an error result."""
        result = parse_version(text)
        assert not result.ok
        assert result.version is None
        assert result.error

    def test_none(self):
        assert not parse_version(None).ok

    def test_result_type(self):
        assert isinstance(parse_version("0.0.1"), VersionParseResult)


class TestIncrement:
    """Tests for Increment enum."""

    def test_severity_order(self):
        assert Increment.MAJOR.severity > Increment.MINOR.severity > Increment.PATCH.severity

    def test_from_name(self):
        assert Increment.from_name("minor") is Increment.MINOR
        assert Increment.from_name(" MAJOR ") is Increment.MAJOR

    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="Unknown increment"):
            Increment.from_name("huge")


class TestComponent:
    """Tests for Component."""

    def test_tag_name(self):
        component = Component("api")
        assert component.tag_prefix == "api-v"
        assert component.tag_name(Version(1, 2, 3)) == "api-v1.2.3"

    def test_history_path_defaults_to_name(self):
        assert Component("api").history_path == "api"
        assert Component("api", "services/api").history_path == "services/api"

    def test_empty_name(self):
        with pytest.raises(ValueError):
            Component("  ")


class TestCommitRecord:
    def test_subject(self):
        record = CommitRecord(message="Add parser\n\n+semver: minor", order=0)
        assert record.subject == "Add parser"


class TestBranch:
    """Tests for Branch and BranchKind."""

    def test_short_name(self):
        branch = Branch(name="feature/login", kind=BranchKind.FEATURE, prefix="feature/")
        assert branch.short_name == "login"

    def test_short_name_without_prefix(self):
        assert Branch(name="main", kind=BranchKind.STABLE).short_name == "main"

    def test_prerelease_kinds(self):
        assert BranchKind.FEATURE.is_prerelease
        assert BranchKind.TOPIC.is_prerelease
        assert BranchKind.TASK.is_prerelease
        assert BranchKind.HOTFIX.is_prerelease
        assert not BranchKind.STABLE.is_prerelease
        assert not BranchKind.OTHER.is_prerelease


class TestPreReleaseIdentifier:
    def test_render(self):
        identifier = PreReleaseIdentifier(Version(1, 1, 0), "login", 1)
        assert str(identifier) == "1.1.0-login0001"

    def test_render_wide_counter(self):
        identifier = PreReleaseIdentifier(Version(2, 0, 0), "x", 12345)
        assert str(identifier) == "2.0.0-x12345"
