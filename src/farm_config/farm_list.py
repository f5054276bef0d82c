"""Ordered collection of farm entries.

The collection owns entry identities, routes the events entries send upward and
aggregates overall validity (the gate for starting the farmer). Structural
changes happen on the event loop only, so they never interleave mid-update.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from .exceptions import UnknownEntryError
from .farm_entry import FarmEntry
from .models import Delete, Farm, FarmEntryInit, OpenDirectory, StableId, ValidityUpdate
from .sender import OutputSender

logger = logging.getLogger(__name__)

DirectoryChooser = Callable[[StableId], Path | None]


class FarmList:
    """Owns farm entries in display order."""

    def __init__(self, sender: OutputSender | None = None) -> None:
        self.sender = sender if sender is not None else OutputSender()
        self._order: list[StableId] = []
        self._entries: dict[StableId, FarmEntry] = {}

    @classmethod
    async def from_farms(cls, farms: Iterable[Farm], sender: OutputSender | None = None) -> FarmList:
        """Build a collection with one initialized entry per farm."""
        farm_list = cls(sender)
        for farm in farms:
            await farm_list.add(FarmEntryInit.from_farm(farm))
        return farm_list

    def __len__(self) -> int:
        return len(self._order)

    @property
    def entries(self) -> list[FarmEntry]:
        """Initialized entries in display order."""
        return [self._entries[identity] for identity in self._order if identity in self._entries]

    async def add(self, init: FarmEntryInit | None = None) -> StableId:
        """Append a new entry and wait for its initial validation.

        The slot is reserved before validation starts, so concurrent adds keep
        the order in which they were requested.
        """
        if init is None:
            init = FarmEntryInit.empty()

        identity = StableId()
        self._order.append(identity)
        self._refresh_display_indices()

        entry = await FarmEntry.initialize(identity, init.path, init.size, self.sender)

        if identity not in self._order:
            logger.info(f"Farm {identity.key[:8]} removed before initialization finished")
            return identity

        self._entries[identity] = entry
        return identity

    def entry(self, identity: StableId) -> FarmEntry:
        try:
            return self._entries[identity]
        except KeyError as err:
            raise UnknownEntryError(f"No initialized farm with identity {identity!r}") from err

    def position(self, identity: StableId) -> int:
        """Current 0-based position of the entry."""
        try:
            return self._order.index(identity)
        except ValueError as err:
            raise UnknownEntryError(f"No farm with identity {identity!r}") from err

    def identity_at(self, position: int) -> StableId:
        try:
            return self._order[position]
        except IndexError as err:
            raise UnknownEntryError(f"No farm at position {position}") from err

    def remove(self, identity: StableId) -> None:
        position = self.position(identity)
        del self._order[position]
        self._entries.pop(identity, None)
        self._refresh_display_indices()
        logger.info(f"Removed farm at position {position}")

    async def select_directory(self, identity: StableId, path: Path) -> None:
        await self.entry(identity).handle_path_selected(path)

    def change_size(self, identity: StableId, text: str) -> None:
        self.entry(identity).handle_size_text_changed(text)

    async def process_events(self, directory_chooser: DirectoryChooser | None = None) -> bool:
        """Handle pending entry events.

        Args:
            directory_chooser: Called for OpenDirectory requests; returns the
                chosen directory or None if the user cancelled

        Returns:
            True if any entry reported a validity change
        """
        validity_changed = False

        for event in self.sender.drain():
            if isinstance(event, ValidityUpdate):
                validity_changed = True
            elif isinstance(event, Delete):
                if event.identity in self._order:
                    self.remove(event.identity)
                    validity_changed = True
                else:
                    logger.warning(f"Delete requested for unknown farm {event.identity!r}")
            elif isinstance(event, OpenDirectory):
                if directory_chooser is None:
                    logger.warning("Open directory requested but no directory chooser is available")
                    continue
                path = directory_chooser(event.identity)
                if path is not None and event.identity in self._entries:
                    await self.select_directory(event.identity, path)
                    # Events emitted by the selection are picked up next call
            else:
                logger.warning(f"Unexpected farm event: {event!r}")

        return validity_changed

    def is_valid(self) -> bool:
        """True when there is at least one farm and every farm is valid."""
        if not self._order or len(self._entries) != len(self._order):
            return False
        return all(entry.is_valid() for entry in self.entries)

    def farms(self) -> list[Farm]:
        return [entry.to_domain_value() for entry in self.entries]

    def close(self) -> None:
        """Tear down the receiving side; later entry events are dropped."""
        self.sender.close()

    def _refresh_display_indices(self) -> None:
        for position, identity in enumerate(self._order):
            identity.display_index = position
