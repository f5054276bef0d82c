"""Farm entry: one directory plus size allocation, validated independently.

Each entry owns a validated path and a validated size. Input events revalidate
the touched field and report to the owning collection only when the entry's
aggregate validity flips. The directory probe is the only suspension point;
until it completes, the entry keeps showing its previous state.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import SenderClosedError
from .models import Delete, Farm, FarmEntryOutput, OpenDirectory, StableId, ValidityUpdate
from .sender import OutputSender
from .validated_field import ValidatedField
from .validation import is_size_valid, probe_directory_writable

logger = logging.getLogger(__name__)


class FarmEntry:
    """State machine for a single farm row.

    Create instances with ``await FarmEntry.initialize(...)``; the constructor
    alone does not validate anything.
    """

    def __init__(
        self,
        identity: StableId,
        path: ValidatedField[Path | None],
        size: ValidatedField[str],
        sender: OutputSender,
    ) -> None:
        self.identity = identity
        self.path = path
        self.size = size
        self._sender = sender
        # Bumped on every path selection; older probe results are discarded
        self._path_generation = 0

    @classmethod
    async def initialize(
        cls,
        identity: StableId,
        path: Path | None,
        size: str,
        sender: OutputSender,
    ) -> FarmEntry:
        """Validate the initial values and build the entry.

        A ValidityUpdate is always sent afterwards, since the collection may
        have rendered before this asynchronous initialization finished.
        """
        if path is not None and await probe_directory_writable(path):
            path_field = ValidatedField.valid(path)
        else:
            path_field = ValidatedField.invalid(path)

        if is_size_valid(size):
            size_field = ValidatedField.valid(size)
        else:
            size_field = ValidatedField.invalid(size)

        entry = cls(identity, path_field, size_field, sender)
        logger.info(
            "Farm entry initialized",
            extra={
                "extra_context": {
                    "identity": identity.key,
                    "path_valid": path_field.is_valid,
                    "size_valid": size_field.is_valid,
                }
            },
        )

        entry._emit(ValidityUpdate(identity), "validity update")
        return entry

    def is_valid(self) -> bool:
        return self.path.is_valid and self.size.is_valid

    @property
    def show_path_error(self) -> bool:
        """Whether to show the "doesn't exist or lacks permission" hint."""
        return not self.path.is_valid and self.path.value is not None

    async def handle_path_selected(self, path: Path) -> None:
        """Validate and apply a directory chosen by the user.

        If another path is selected while this probe is outstanding, the
        later selection wins and this result is dropped.
        """
        self._path_generation += 1
        generation = self._path_generation

        is_writable = await probe_directory_writable(path)

        if generation != self._path_generation:
            logger.debug(
                f"Discarding stale probe for {path} "
                f"(generation {generation}, current {self._path_generation})"
            )
            return

        self._begin_cycle()
        was_valid = self.is_valid()

        self.path.set_validity(is_writable)
        self.path.replace_value(path)

        self._notify_if_flipped(was_valid)

    def handle_size_text_changed(self, text: str) -> None:
        """Apply new size text; invalid text is kept so it can be corrected."""
        self._begin_cycle()
        was_valid = self.is_valid()

        self.size.set_validity(is_size_valid(text))
        self.size.replace_value(text)

        self._notify_if_flipped(was_valid)

    def to_domain_value(self) -> Farm:
        return Farm(path=self.path.value, size=self.size.value)

    def request_open_directory_picker(self) -> None:
        self._emit(OpenDirectory(self.identity), "open directory")

    def request_delete(self) -> None:
        self._emit(Delete(self.identity), "delete")

    def _begin_cycle(self) -> None:
        self.path.reset_change_flags()
        self.size.reset_change_flags()

    def _notify_if_flipped(self, was_valid: bool) -> None:
        is_valid = self.is_valid()
        if was_valid != is_valid:
            logger.debug(
                f"Farm {self.identity.key[:8]} validity changed: {was_valid} -> {is_valid}"
            )
            self._emit(ValidityUpdate(self.identity), "validity update")

    def _emit(self, event: FarmEntryOutput, description: str) -> None:
        try:
            self._sender.output(event)
        except SenderClosedError as err:
            logger.warning(f"Can't send {description} output: {err}")

    def __repr__(self) -> str:
        return (
            f"FarmEntry(identity={self.identity!r}, path={self.path.value}, "
            f"size={self.size.value!r}, valid={self.is_valid()})"
        )
