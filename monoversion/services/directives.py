"""
Commit message directives for monoversion.

A commit selects its bump level with a marker anywhere in its message:

    +semver: major
    +semver: minor
    +semver: patch

Matching is case-sensitive and the first marker in a message wins.
"""

import re
from typing import Iterable, Optional

from ..domain.version import Increment

DIRECTIVE_PATTERN = re.compile(r'\+semver:\s*(major|minor|patch)\b')


def parse_directive(message: str, default: Optional[Increment] = Increment.PATCH) -> Optional[Increment]:
    """
    Extract the increment a commit message asks for.

    Args:
        message: Full commit message
        default: Returned when the message has no marker; pass None to
            tell "explicit directive" apart from "absent"

    Returns:
        Increment from the marker, else default
    """
    match = DIRECTIVE_PATTERN.search(message or "")
    if not match:
        return default
    return Increment(match.group(1))


def highest_directive(messages: Iterable[str]) -> Optional[Increment]:
    """
    Most severe explicit directive across messages (major > minor > patch).

    Messages without a marker are ignored.

    Returns:
        The highest Increment, or None if no message carries a marker
    """
    highest = None
    for message in messages:
        increment = parse_directive(message, default=None)
        if increment is None:
            continue
        if highest is None or increment.severity > highest.severity:
            highest = increment
    return highest
