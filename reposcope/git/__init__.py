"""Git access layer for reposcope.

This package provides cached, parsed access to git metadata with:
- exceptions: GitError, InvalidRepositoryError, UnparsableOutputError,
              GitCommandError, ToolNotFoundError
- options: GitOptions, compile_options, format_command
- runner: CommandRunner, CommandResult
- parsing: DescribeInfo, CommitInfo, parse_describe, parse_commit_info
- scope: RepoScope, RecordState, GitScope
"""

# Exceptions
from reposcope.git.exceptions import (
    GitError,
    InvalidRepositoryError,
    UnparsableOutputError,
    GitCommandError,
    ToolNotFoundError,
)

# Option compilation
from reposcope.git.options import (
    GitOptions,
    compile_options,
    format_command,
)

# Command runner
from reposcope.git.runner import (
    CommandRunner,
    CommandResult,
    DEFAULT_TOOL_PATH,
)

# Output parsers
from reposcope.git.parsing import (
    DescribeInfo,
    CommitInfo,
    parse_describe,
    parse_commit_info,
    COMMIT_FIELDS,
    LOG_FORMAT,
)

# Repository scope
from reposcope.git.scope import (
    RepoScope,
    RecordState,
    GitScope,
)


__all__ = [
    # Exceptions
    "GitError",
    "InvalidRepositoryError",
    "UnparsableOutputError",
    "GitCommandError",
    "ToolNotFoundError",
    # Options
    "GitOptions",
    "compile_options",
    "format_command",
    # Runner
    "CommandRunner",
    "CommandResult",
    "DEFAULT_TOOL_PATH",
    # Parsing
    "DescribeInfo",
    "CommitInfo",
    "parse_describe",
    "parse_commit_info",
    "COMMIT_FIELDS",
    "LOG_FORMAT",
    # Scope
    "RepoScope",
    "RecordState",
    "GitScope",
]
