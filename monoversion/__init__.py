"""
monoversion - Semantic versions for monorepo components from git history.

A component's version is never stored in a file. It is derived from the
component's last release tag plus the commits that touched its path since:

    api-v1.4.0  +  "fix parser"                    -> 1.4.1
                +  "add endpoint +semver: minor"   -> 1.5.0

Quick Start:
    from monoversion import ReleaseDriver, Component

    driver = ReleaseDriver("/path/to/repo")
    resolution = driver.resolve(Component("api", "services/api"))
    print(resolution.version)

Branches named feature/*, topic/*, task/* or hotfix/* resolve to a
pre-release identifier such as "1.5.0-login0003" and are never tagged.
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    Version,
    VersionParseResult,
    parse_version,
    Increment,
    Component,
    ReleaseTag,
    CommitRecord,
    Branch,
    BranchKind,
    PreReleaseIdentifier,
)

# Services
from .services import (
    TagIndex,
    HistoryReader,
    VersionBumper,
    BranchClassifier,
    PreReleaseComposer,
    ReleaseDriver,
    Resolution,
    parse_directive,
    highest_directive,
)

# Errors
from .exit_codes import (
    CommandError,
    ConfigError,
    VersioningError,
    MalformedTagError,
    HistoryReadError,
    TagCreationError,
    TagPushError,
)

# Configuration
from .config import load_config, save_config

__all__ = [
    "__version__",
    "Version",
    "VersionParseResult",
    "parse_version",
    "Increment",
    "Component",
    "ReleaseTag",
    "CommitRecord",
    "Branch",
    "BranchKind",
    "PreReleaseIdentifier",
    "TagIndex",
    "HistoryReader",
    "VersionBumper",
    "BranchClassifier",
    "PreReleaseComposer",
    "ReleaseDriver",
    "Resolution",
    "parse_directive",
    "highest_directive",
    "CommandError",
    "ConfigError",
    "VersioningError",
    "MalformedTagError",
    "HistoryReadError",
    "TagCreationError",
    "TagPushError",
    "load_config",
    "save_config",
]
