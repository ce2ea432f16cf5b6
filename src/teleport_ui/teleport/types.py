"""Core type definitions for Teleport database records."""

from __future__ import annotations

from dataclasses import dataclass, field


class TeleportUser(str):
    """A database user name; displays as itself."""


@dataclass
class TeleportDBLabels:
    cloud_provider: str = ""
    db_name: str = ""
    engine: str = ""
    identifier: str = ""
    owner: str = ""


@dataclass
class TeleportDBMeta:
    name: str = ""
    labels: TeleportDBLabels = field(default_factory=TeleportDBLabels)


@dataclass
class TeleportDB:
    metadata: TeleportDBMeta = field(default_factory=TeleportDBMeta)
    allowed_users: list[TeleportUser] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.metadata.name

    def __str__(self) -> str:
        labels = self.metadata.labels
        engine = labels.engine or "unknown"
        owner = labels.owner or "unknown"
        return f"{self.metadata.name} ({engine}) - owner: {owner}"


def labels_from_dict(data: dict) -> TeleportDBLabels:
    """Deserialize labels from ``tsh`` JSON (dash-separated keys)."""
    return TeleportDBLabels(
        cloud_provider=data.get("cloud-provider", ""),
        db_name=data.get("db-name", ""),
        engine=data.get("engine", ""),
        identifier=data.get("identifier", ""),
        owner=data.get("owner", ""),
    )


def db_from_dict(data: dict) -> TeleportDB:
    """Deserialize one entry of ``tsh db ls --format json``."""
    metadata = data.get("metadata") or {}
    users = data.get("users") or {}
    return TeleportDB(
        metadata=TeleportDBMeta(
            name=metadata.get("name", ""),
            labels=labels_from_dict(metadata.get("labels") or {}),
        ),
        allowed_users=[TeleportUser(u) for u in users.get("allowed") or []],
    )

