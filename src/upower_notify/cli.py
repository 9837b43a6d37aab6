"""
CLI — the command-line entry point for upower-notify.

Commands:
    upower-notify run       — Watch the battery and react to changes
    upower-notify init      — Write the default config file
    upower-notify config    — Print the effective configuration
    upower-notify status    — Show the device's current readings
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from upower_notify import __version__

console = Console()
logger = logging.getLogger("upower_notify")

LOG_LEVEL_ENV = "UPOWER_NOTIFY_LOG"

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the configuration file",
)


def setup_logging(level: str | None) -> None:
    """Route log records through rich; level from flag, env, or INFO."""
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_or_exit(config_path: Path | None):
    from upower_notify.core import ConfigError, load_config

    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(2)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """upower-notify — notifications and hooks for battery events."""
    pass


# ---------------------------------------------------------------------------
# Daemon
# ---------------------------------------------------------------------------


@main.command()
@config_option
@click.option("--dry-run", is_flag=True, help="Print notifications to the terminal instead")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help=f"Log level (default: ${LOG_LEVEL_ENV} or INFO)",
)
def run(config_path, dry_run, log_level):
    """Watch the battery and react to warning level and state changes."""
    from upower_notify.core import ConfigError
    from upower_notify.daemon import run_daemon

    setup_logging(log_level)
    config = _load_or_exit(config_path)
    logger.debug("Config loaded: %s", config.model_dump(mode="json"))

    try:
        asyncio.run(run_daemon(config, dry_run=dry_run))
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(2)
    except Exception:
        logger.exception("upower-notify stopped on an unrecoverable error")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Config management
# ---------------------------------------------------------------------------


@main.command()
@config_option
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(config_path, force):
    """Write the default configuration file."""
    from upower_notify.core import CONFIG_FILE, Config, save_config

    path = config_path or CONFIG_FILE
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists, use --force to overwrite[/yellow]")
        sys.exit(1)

    save_config(Config(), path)
    console.print(f"[green]>[/green] Config saved to {path}")


@main.command(name="config")
@config_option
def show_config(config_path):
    """Print the effective configuration (file merged over defaults)."""
    config = _load_or_exit(config_path)
    click.echo(
        yaml.safe_dump(config.model_dump(mode="json"), default_flow_style=False, sort_keys=False),
        nl=False,
    )


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


@main.command()
@config_option
def status(config_path):
    """Show the device's current charge, runtime and state."""
    from upower_notify.core.formatting import format_duration, format_percentage
    from upower_notify.daemon import read_status

    config = _load_or_exit(config_path)
    try:
        info = asyncio.run(read_status(config))
    except Exception as e:
        console.print(f"[red]Error: cannot read {config.device}: {e}[/red]")
        sys.exit(1)

    table = Table(title=info["device"], show_header=False)
    table.add_column("Property", style="bold")
    table.add_column("Value")
    table.add_row("Percentage", f"{format_percentage(info['percentage'])}%")
    table.add_row("Time to empty", format_duration(info["time_to_empty"]))
    table.add_row("Warning level", info["warning_level"].name)
    table.add_row("State", info["state"].name)
    console.print(table)


if __name__ == "__main__":
    main()
