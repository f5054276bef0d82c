"""Outbound event channel from entries to their owning collection."""

from __future__ import annotations

import logging
import queue

from .exceptions import SenderClosedError
from .models import FarmEntryOutput

logger = logging.getLogger(__name__)


class OutputSender:
    """Buffers entry events until the collection drains them.

    Once the receiving side is torn down with ``close()``, every further
    ``output()`` raises SenderClosedError.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: queue.Queue[FarmEntryOutput] = queue.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def output(self, event: FarmEntryOutput) -> None:
        """Publish an event to the collection.

        Raises:
            SenderClosedError: If the collection is no longer listening or its
                buffer is full
        """
        if self._closed:
            raise SenderClosedError(f"Receiver closed, dropping {type(event).__name__}")
        try:
            self._queue.put_nowait(event)
        except queue.Full as err:
            raise SenderClosedError(
                f"Event queue full, dropping {type(event).__name__}"
            ) from err

    def drain(self) -> list[FarmEntryOutput]:
        """Return all pending events in emission order."""
        events: list[FarmEntryOutput] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return events

    def close(self) -> None:
        """Stop accepting events; pending ones are discarded."""
        self._closed = True
        dropped = len(self.drain())
        if dropped:
            logger.debug(f"OutputSender closed with {dropped} pending event(s)")
