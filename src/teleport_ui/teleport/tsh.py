"""tsh execution utilities. Shells out to the Teleport ``tsh`` binary."""

from __future__ import annotations

import asyncio
import json
import logging
import subprocess

from teleport_ui.teleport.types import TeleportDB, TeleportUser, db_from_dict

logger = logging.getLogger(__name__)


class TshError(RuntimeError):
    """A ``tsh`` invocation failed or produced unusable output."""


async def _spawn(tsh: str, *args: str, **kwargs) -> asyncio.subprocess.Process:
    logger.debug("running %s %s", tsh, " ".join(args))
    try:
        return await asyncio.create_subprocess_exec(tsh, *args, **kwargs)
    except FileNotFoundError as e:
        raise TshError(f"tsh binary not found: {tsh}") from e


def parse_databases(output: str) -> list[TeleportDB]:
    """Parse ``tsh db ls --format json`` output."""
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise TshError(f"decoding databases: {e}") from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise TshError("decoding databases: expected a JSON array")
    return [db_from_dict(entry) for entry in data if isinstance(entry, dict)]


async def get_databases(tsh: str = "tsh") -> list[TeleportDB]:
    """List the databases the current Teleport login can reach."""
    proc = await _spawn(
        tsh,
        "db",
        "ls",
        "--format",
        "json",
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    stdout_bytes, stderr_bytes = await proc.communicate()

    if proc.returncode != 0:
        stderr = stderr_bytes.decode(errors="replace").strip()
        raise TshError(
            f"tsh db ls exited with code {proc.returncode}"
            + (f": {stderr}" if stderr else "")
        )

    databases = parse_databases(stdout_bytes.decode(errors="replace"))
    logger.info("found %d databases", len(databases))
    return databases


def connect_args(db: TeleportDB, user: TeleportUser | str) -> list[str]:
    return [
        "db",
        "connect",
        db.metadata.name,
        "--db-user",
        str(user),
        "--db-name",
        db.metadata.labels.db_name,
    ]


async def connect(db: TeleportDB, user: TeleportUser | str, tsh: str = "tsh") -> int:
    """Open an interactive database session. Returns the exit code.

    The child inherits this process's stdin, stdout and stderr.
    """
    proc = await _spawn(tsh, *connect_args(db, user))
    await proc.wait()
    return proc.returncode or 0
