"""CLI entry point for teleport-ui. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys

import click

from teleport_ui.config import Config, load_config, save_config
from teleport_ui.teleport import TeleportDB, TeleportUser, TshError, connect, get_databases
from teleport_ui.tui import FinderKeybindingsManager, TerminalError, run_fuzzy_finder

logger = logging.getLogger(__name__)

LOG_LEVELS = ["debug", "info", "warning", "error"]


def _run(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _setup_logging(level: str, log_file: str | None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )


@contextlib.contextmanager
def _logging_paused():
    """Detach root handlers that write to a terminal while the finder draws.

    A ``NullHandler`` stands in for them; with no handlers at all, records
    would go to ``logging.lastResort`` on stderr.
    """
    root = logging.getLogger()
    paused = [h for h in root.handlers if _writes_to_tty(h)]
    null = logging.NullHandler()
    for handler in paused:
        root.removeHandler(handler)
    root.addHandler(null)
    try:
        yield
    finally:
        root.removeHandler(null)
        for handler in paused:
            root.addHandler(handler)


def _writes_to_tty(handler: logging.Handler) -> bool:
    if not isinstance(handler, logging.StreamHandler) or isinstance(
        handler, logging.FileHandler
    ):
        return False
    isatty = getattr(handler.stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        return False


async def _pick(items, keybindings: FinderKeybindingsManager):
    with _logging_paused():
        return await run_fuzzy_finder(items, keybindings=keybindings)


def _keybindings(config: Config) -> FinderKeybindingsManager:
    try:
        return FinderKeybindingsManager(config.keybindings)
    except ValueError as e:
        raise click.ClickException(f"Invalid keybindings in config: {e}") from e


async def _pick_and_connect(
    config: Config, user_name: str | None
) -> int | None:
    """Pick a database and a user, then connect. ``None`` means cancelled."""
    keybindings = _keybindings(config)

    databases = await get_databases(config.tsh)
    if not databases:
        raise click.ClickException("No databases available")

    db: TeleportDB | None = await _pick(databases, keybindings)
    if db is None:
        click.echo("No database selected")
        return None
    click.echo(f"Selected: {db}")

    if user_name is not None:
        user: TeleportUser | None = TeleportUser(user_name)
    else:
        if not db.allowed_users:
            raise click.ClickException(f"Database '{db.name}' has no allowed users")
        user = await _pick(db.allowed_users, keybindings)
        if user is None:
            click.echo("No user selected")
            return None
    click.echo(f"Connecting to '{db.name}' as '{user}'...")

    return await connect(db, user, tsh=config.tsh)


@click.group(invoke_without_command=True)
@click.option("--tsh", "tsh_path", default=None, help="Path to the tsh binary")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS),
    default=None,
    help="Logging level (default: from config, else warning)",
)
@click.option("--log-file", default=None, help="Write log records to this file")
@click.pass_context
def main(ctx, tsh_path, log_level, log_file):
    """Pick a Teleport database and user with a fuzzy finder, then connect."""
    config = load_config()
    if tsh_path:
        config.tsh = tsh_path
    _setup_logging(log_level or config.log_level, log_file)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        ctx.invoke(connect_command)


@main.command("connect")
@click.option("--user", "user_name", default=None, help="Database user (skips the user picker)")
@click.pass_obj
def connect_command(config: Config, user_name):
    """Choose a database and user interactively and connect."""
    try:
        exit_code = _run(_pick_and_connect(config, user_name))
    except (TshError, TerminalError) as e:
        logger.error("%s", e)
        raise click.ClickException(str(e)) from e

    if exit_code:
        sys.exit(exit_code)


@main.command("ls")
@click.pass_obj
def list_command(config: Config):
    """List available databases."""
    try:
        databases = _run(get_databases(config.tsh))
    except TshError as e:
        logger.error("%s", e)
        raise click.ClickException(str(e)) from e

    for db in databases:
        users = ", ".join(db.allowed_users) or "-"
        click.echo(f"{db}  [users: {users}]")


@main.command("init-config")
@click.pass_obj
def init_config_command(config: Config):
    """Write the current settings to the config file."""
    save_config(config)
    click.echo("Config saved")


if __name__ == "__main__":
    main()
