"""Repository metadata CLI commands."""

import json
from typing import Optional

import typer

from reposcope import __version__
from reposcope.git import COMMIT_FIELDS, GitError
from reposcope.cli.utils import collect_info, format_value, open_scope, setup_logging

PATH_ARGUMENT_HELP = "Repository path (defaults to config or current directory)"

DESCRIBE_FIELDS = ["full", "last_tag", "commits_since_tag", "commit_id"]


def main_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log git invocations to stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
    ),
) -> None:
    """Show git repository metadata."""
    if version:
        typer.echo(f"reposcope {__version__}")
        raise typer.Exit(0)

    setup_logging(verbose)

    # Default to the full summary when no subcommand is given
    if ctx.invoked_subcommand is None:
        info_command(path=None, as_json=False)


def info_command(
    path: Optional[str] = typer.Argument(None, help=PATH_ARGUMENT_HELP),
    as_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the metadata as JSON",
    ),
) -> None:
    """Show branch, tag and last commit information."""
    scope = open_scope(path)
    try:
        if not scope.is_repository():
            typer.echo("Error: Not a git repository.", err=True)
            raise typer.Exit(1)
        info = collect_info(scope)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(info, indent=2))
        return

    typer.echo(f"Branch: {format_value(info['branch'])}")
    typer.echo(f"Last tag: {format_value(info['last_tag'])}")
    typer.echo(f"Commits since tag: {format_value(info['commits_since_tag'])}")

    commit = info["commit"]
    if commit is None:
        typer.echo("Last commit: (none)")
        return

    typer.echo()
    typer.echo("Last commit:")
    typer.echo(f"  Id: {commit['commit_id_long']}")
    typer.echo(f"  Author: {commit['author']} <{commit['author_email']}>")
    typer.echo(f"  Committer: {commit['committer']} <{commit['committer_email']}>")
    typer.echo(f"  Date: {commit['date']}")
    typer.echo(f"  Message: {commit['message']}")


def describe_command(
    path: Optional[str] = typer.Argument(None, help=PATH_ARGUMENT_HELP),
    field: Optional[str] = typer.Option(
        None,
        "--field",
        "-f",
        help="Field to show (full, last_tag, commits_since_tag, commit_id)",
    ),
) -> None:
    """Show the nearest tag as reported by git describe."""
    if field is not None and field not in DESCRIBE_FIELDS:
        typer.echo(f"Invalid field: {field}", err=True)
        typer.echo(f"Valid fields: {', '.join(DESCRIBE_FIELDS)}")
        raise typer.Exit(1)

    scope = open_scope(path)
    try:
        value = scope.describe(field)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if value is None:
        typer.echo("No tags found.", err=True)
        raise typer.Exit(1)
    typer.echo(value)


def commit_command(
    path: Optional[str] = typer.Argument(None, help=PATH_ARGUMENT_HELP),
    field: Optional[str] = typer.Option(
        None,
        "--field",
        "-f",
        help="Single field to show (e.g., author, commit_id_short)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the commit as JSON",
    ),
) -> None:
    """Show details of the last commit."""
    if field is not None and field not in COMMIT_FIELDS:
        typer.echo(f"Invalid field: {field}", err=True)
        typer.echo(f"Valid fields: {', '.join(COMMIT_FIELDS)}")
        raise typer.Exit(1)

    scope = open_scope(path)
    try:
        value = scope.commit_info(field)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if value is None:
        typer.echo("No commits found.", err=True)
        raise typer.Exit(1)

    if field is not None:
        typer.echo(value)
    elif as_json:
        typer.echo(value.model_dump_json(indent=2))
    else:
        for name in COMMIT_FIELDS:
            typer.echo(f"{name}: {getattr(value, name)}")


def branch_command(
    path: Optional[str] = typer.Argument(None, help=PATH_ARGUMENT_HELP),
) -> None:
    """Show the current branch name."""
    ref_command("HEAD", path)


def ref_command(
    ref: str = typer.Argument(..., help="Ref or other treeish to name"),
    path: Optional[str] = typer.Argument(None, help=PATH_ARGUMENT_HELP),
) -> None:
    """Show the symbolic name of a ref."""
    scope = open_scope(path)
    name = scope.name_of_ref(ref)
    if name is None:
        typer.echo(f"Could not resolve ref: {ref}", err=True)
        raise typer.Exit(1)
    typer.echo(name)


def is_repo_command(
    path: Optional[str] = typer.Argument(None, help=PATH_ARGUMENT_HELP),
) -> None:
    """Exit with status 0 if the path is a git repository, 1 otherwise."""
    scope = open_scope(path)
    if scope.is_repository():
        typer.echo("yes")
        return
    typer.echo("no")
    raise typer.Exit(1)
