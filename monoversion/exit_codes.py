"""
Standard exit codes for monoversion commands.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination (including "no new commits")
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions (tag push rejected)
DATA_ERROR = 70          # Malformed tag or version string
HISTORY_ERROR = 72       # Git history could not be read
TAG_ERROR = 73           # Release tag could not be created
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

PERMISSION_HINT = (
    "check that you have permission to create and push tags "
    "and that the tag does not already exist"
)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class VersioningError(CommandError):
    """Base class for fatal errors raised while resolving a version."""


class MalformedTagError(VersioningError):
    """Raised when an explicitly requested tag does not carry a valid version."""
    def __init__(self, tag: str, reason: str):
        super().__init__(f"Malformed release tag '{tag}': {reason}", DATA_ERROR)
        self.tag = tag


class HistoryReadError(VersioningError):
    """Raised when git refuses a ref, range or path while reading history."""
    def __init__(self, message: str, command: Optional[str] = None, stderr: Optional[str] = None):
        detail = message
        if stderr:
            detail = f"{message}: {stderr.strip()}"
        super().__init__(detail, HISTORY_ERROR)
        self.command = command
        self.stderr = stderr


class TagCreationError(VersioningError):
    """Raised when the release tag cannot be created locally."""
    def __init__(self, tag: str, stderr: Optional[str] = None):
        message = f"Could not create tag '{tag}'"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(f"{message} ({PERMISSION_HINT})", TAG_ERROR)
        self.tag = tag


class TagPushError(VersioningError):
    """Raised when the release tag cannot be pushed to the shared remote."""
    def __init__(self, tag: str, remote: str, stderr: Optional[str] = None):
        message = f"Could not push tag '{tag}' to '{remote}'"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(f"{message} ({PERMISSION_HINT})", PERMISSION_ERROR)
        self.tag = tag
        self.remote = remote
