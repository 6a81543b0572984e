"""CLI entry point for reposcope.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from reposcope.cli.config import config_app
from reposcope.cli.main import (
    branch_command,
    commit_command,
    describe_command,
    info_command,
    is_repo_command,
    main_command,
    ref_command,
)

# Main application
app = typer.Typer(
    name="reposcope",
    help="reposcope: git repository metadata at a glance",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("info")(info_command)
app.command("describe")(describe_command)
app.command("commit")(commit_command)
app.command("branch")(branch_command)
app.command("ref")(ref_command)
app.command("is-repo")(is_repo_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "main_command",
    "info_command",
    "describe_command",
    "commit_command",
    "branch_command",
    "ref_command",
    "is_repo_command",
]
