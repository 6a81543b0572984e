"""CLI commands for user configuration management."""

from pathlib import Path

import typer

from reposcope import config as user_config

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage reposcope configuration in ~/.reposcope/",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    try:
        config = user_config.load_config()
    except user_config.ConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Current reposcope configuration ({user_config.get_config_file_path()}):")
    typer.echo()
    typer.echo(f"  Tool path: {config.tool_path}")
    typer.echo(f"  Repository: {config.path or '(current directory)'}")

    if config.options:
        typer.echo()
        typer.echo("  Global git options:")
        for name, value in config.options.items():
            typer.echo(f"    - {name}" + (f"={value}" if value else ""))


@config_app.command("set-tool")
def config_set_tool(
    tool_path: str = typer.Argument(
        ...,
        help="Path to the git executable (e.g., /usr/local/bin/git)",
    ),
) -> None:
    """Set the git executable used for all commands."""
    try:
        user_config.set_config_value("tool_path", tool_path)
    except user_config.ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ Tool path set to {tool_path}")


@config_app.command("set-path")
def config_set_path(
    path: Path = typer.Argument(
        ...,
        help="Default repository directory",
    ),
) -> None:
    """Set the default repository to inspect."""
    if not path.is_dir():
        typer.echo(f"Error: Not a directory: {path}", err=True)
        raise typer.Exit(1)
    try:
        user_config.set_config_value("path", str(path.resolve()))
    except user_config.ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ Default repository set to {path.resolve()}")


@config_app.command("set-option")
def config_set_option(
    name: str = typer.Argument(
        ...,
        help="Global git option name without leading dashes (e.g., no-pager)",
    ),
    value: str = typer.Argument(
        "",
        help="Option value; omit for a flag",
    ),
) -> None:
    """Add or update a global git option."""
    name = name.lstrip("-")
    if not name:
        typer.echo("Error: Option name cannot be empty", err=True)
        raise typer.Exit(1)
    try:
        user_config.set_option(name, value)
    except user_config.ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ Option set: {name}" + (f"={value}" if value else ""))
