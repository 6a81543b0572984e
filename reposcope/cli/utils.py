"""Shared utility functions for CLI commands."""

import logging
from typing import Any, Optional

import typer

from reposcope.config import ConfigError, load_config
from reposcope.git import GitError, GitScope


def setup_logging(verbose: bool = False) -> None:
    """Configure stderr logging for the CLI.

    Args:
        verbose: Log every git invocation and cache hit when True.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def open_scope(path: Optional[str]) -> GitScope:
    """Build a GitScope from user configuration, exiting on errors.

    Args:
        path: Repository path given on the command line, if any.

    Returns:
        A scope for the requested (or configured, or current) repository.
    """
    try:
        config = load_config()
        return GitScope.from_config(config, path)
    except (ConfigError, GitError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def collect_info(scope: GitScope) -> dict[str, Any]:
    """Collect all repository metadata into a single dictionary.

    Args:
        scope: The repository scope to query.

    Returns:
        Dictionary with branch, tag and last commit details. Values that
        the repository cannot provide are None.
    """
    commit = scope.commit_info()
    return {
        "branch": scope.current_branch(),
        "describe": scope.describe(),
        "last_tag": scope.last_tag(),
        "commits_since_tag": scope.commits_since_tag(),
        "commit": commit.model_dump() if commit is not None else None,
    }


def format_value(value: Any) -> str:
    """Format a possibly missing value for display."""
    if value is None:
        return "(none)"
    return str(value)
