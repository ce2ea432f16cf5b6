"""Teleport collaborators: database listing and connection via ``tsh``."""

from teleport_ui.teleport.tsh import (
    TshError,
    connect,
    connect_args,
    get_databases,
    parse_databases,
)
from teleport_ui.teleport.types import (
    TeleportDB,
    TeleportDBLabels,
    TeleportDBMeta,
    TeleportUser,
    db_from_dict,
)

__all__ = [
    # Types
    "TeleportDB",
    "TeleportDBLabels",
    "TeleportDBMeta",
    "TeleportUser",
    "db_from_dict",
    # tsh
    "TshError",
    "get_databases",
    "parse_databases",
    "connect",
    "connect_args",
]
