"""Data models for farm configuration.

This module contains the domain value persisted for each farm, the initial
values an entry is created from, the collection-assigned identity token and the
events an entry sends to its collection.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(unsafe_hash=True)
class StableId:
    """Opaque identity assigned to an entry by its owning collection.

    ``display_index`` is the entry's current position and is refreshed by the
    collection whenever entries are added or removed. It is presentation only:
    equality and hashing use ``key``.
    """

    key: str = field(default_factory=lambda: uuid.uuid4().hex)
    display_index: int = field(default=0, compare=False, hash=False)

    def __repr__(self) -> str:
        return f"StableId({self.key[:8]}, display_index={self.display_index})"


@dataclass(frozen=True)
class Farm:
    """A farm as consumed outside the configuration panel.

    ``size`` is kept as entered text; it is parsed wherever it is used.
    ``path`` is None when no directory has been chosen; it is stored as "".
    """

    path: Path | None
    size: str

    def to_dict(self) -> dict[str, str]:
        return {"path": str(self.path) if self.path is not None else "", "size": self.size}

    @classmethod
    def from_dict(cls, data: dict) -> Farm:
        path = str(data["path"])
        return cls(path=Path(path) if path else None, size=str(data["size"]))


@dataclass(frozen=True)
class FarmEntryInit:
    """Initial path and size for a new entry; path None means none chosen yet."""

    path: Path | None
    size: str

    @classmethod
    def empty(cls) -> FarmEntryInit:
        """The "no entry yet" value used for a freshly added row."""
        return cls(path=None, size="")

    @classmethod
    def from_farm(cls, farm: Farm) -> FarmEntryInit:
        return cls(path=farm.path, size=farm.size)


@dataclass(frozen=True)
class OpenDirectory:
    """Ask the host to show a directory chooser for this entry."""

    identity: StableId


@dataclass(frozen=True)
class Delete:
    """Ask the collection to remove this entry."""

    identity: StableId


@dataclass(frozen=True)
class ValidityUpdate:
    """The entry's aggregate validity changed, or was first computed."""

    identity: StableId


FarmEntryOutput = OpenDirectory | Delete | ValidityUpdate
