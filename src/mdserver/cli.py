"""Click CLI for mdserver — serve Markdown documents over HTTP."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from mdserver.config.loader import load_server_config
from mdserver.errors.exceptions import ConfigError

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, configured_level: str = "WARNING") -> None:
    """Configure logging from -v flags, falling back to the configured level."""
    level = logging.getLevelName(configured_level)
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=True, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="mdserver")
def cli() -> None:
    """mdserver — Markdown documents served as HTML pages."""


@cli.command()
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="YAML config file (overrides global and project config).")
@click.option("--listen", type=str, default=None, help="Listen address, host:port.")
@click.option("--posts-dir", type=click.Path(file_okay=False), default=None,
              help="Directory holding the Markdown documents.")
@click.option("--static-dir", type=click.Path(file_okay=False), default=None,
              help="Directory served under /static/.")
@click.option("--upload-dir", type=click.Path(file_okay=False), default=None,
              help="Directory served under /uploads/.")
@click.option("--templates-dir", type=click.Path(exists=True, file_okay=False), default=None,
              help="Directory with layout.html, post.html and error.html.")
@click.option("--no-coalesce", is_flag=True, default=False,
              help="Allow duplicate concurrent renders of the same document.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def serve(
    config_file: str | None,
    listen: str | None,
    posts_dir: str | None,
    static_dir: str | None,
    upload_dir: str | None,
    templates_dir: str | None,
    no_coalesce: bool,
    verbose: int,
) -> None:
    """Start the HTTP server."""
    from mdserver.server.app import create_app, run_server

    try:
        config = load_server_config(
            config_file=config_file,
            listen=listen,
            posts_dir=posts_dir,
            static_dir=static_dir,
            upload_dir=upload_dir,
            templates_dir=templates_dir,
            coalesce_renders=False if no_coalesce else None,
        )
    except ConfigError as e:
        error_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)

    _setup_logging(verbose, config.log_level)
    app = create_app(config)

    try:
        run_server(app, config)
    except OSError as e:
        error_console.print(f"[red]Cannot listen on {config.listen}:[/red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        error_console.print("Stopped.")


@cli.command("config")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="YAML config file (overrides global and project config).")
def show_config(config_file: str | None) -> None:
    """Show the resolved configuration."""
    try:
        config = load_server_config(config_file=config_file)
    except ConfigError as e:
        error_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)

    table = Table(title="Server Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for name, value in config.model_dump().items():
        table.add_row(name, "-" if value is None else escape(str(value)))

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()
