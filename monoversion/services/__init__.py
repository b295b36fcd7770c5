"""
Service layer for monoversion.

Contains the version resolution logic that orchestrates domain objects
and the git client:
- TagIndex: Component release tags, newest by Version
- HistoryReader: Commit messages touching a component since a baseline
- VersionBumper: Folds directives into a Version
- BranchClassifier / PreReleaseComposer: Pre-release identifiers
- ReleaseDriver: Top-level resolution and tagging

Services are the primary API for commands to use.
"""

from .tag_index import TagIndex
from .history import Baseline, HistoryReader
from .directives import parse_directive, highest_directive
from .accumulator import VersionBumper
from .prerelease import BranchClassifier, PreReleaseComposer, PreRelease, sanitize_suffix
from .release import ReleaseDriver, Resolution, Calculation

__all__ = [
    'TagIndex',
    'Baseline',
    'HistoryReader',
    'parse_directive',
    'highest_directive',
    'VersionBumper',
    'BranchClassifier',
    'PreReleaseComposer',
    'PreRelease',
    'sanitize_suffix',
    'ReleaseDriver',
    'Resolution',
    'Calculation',
]
