"""Cached access to git repository metadata."""

from importlib.metadata import version, PackageNotFoundError

from reposcope.git import (
    CommandRunner,
    CommitInfo,
    DescribeInfo,
    GitError,
    GitScope,
    InvalidRepositoryError,
    RepoScope,
    UnparsableOutputError,
)

try:
    __version__ = version("reposcope")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"

__all__ = [
    "CommandRunner",
    "CommitInfo",
    "DescribeInfo",
    "GitError",
    "GitScope",
    "InvalidRepositoryError",
    "RepoScope",
    "UnparsableOutputError",
    "__version__",
]
