"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- InvalidRepositoryError: Raised when a supplied repository path is not a directory
- UnparsableOutputError: Raised when git output does not match the expected shape
- GitCommandError: Raised when a checked git command exits non-zero
- ToolNotFoundError: Raised when the git executable cannot be found
"""

from typing import Optional


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class InvalidRepositoryError(GitError):
    """Raised when the repository path does not exist as a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Repository path is not a directory: {path}")


class UnparsableOutputError(GitError):
    """Raised when git produced output that cannot be parsed."""

    def __init__(self, command: str, output: str, reason: Optional[str] = None):
        self.command = command
        self.output = output
        message = f"Unparsable output from git {command}: {output!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class GitCommandError(GitError):
    """Raised when a checked git command exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Git command failed: {command}\n{stderr}".rstrip())


class ToolNotFoundError(GitError):
    """Raised when the git executable is not installed or not in PATH."""

    def __init__(self, tool_path: str):
        self.tool_path = tool_path
        super().__init__(f"Git is not installed or not in PATH: {tool_path}")
