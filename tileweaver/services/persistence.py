"""Debounced persistence.

Coalesces bursts of edits (a continuous slider drag) into one storage write.
Every request restarts a fixed delay; only the latest request survives. The
write runs on the session's asyncio loop as a single synchronous step.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from tileweaver.core.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5


class DebouncedSaver:
    """One cancellable delayed write per session.

    Usage:
        saver = DebouncedSaver(write=lambda: store.write(doc.serialize()))
        saver.request_save()   # (re)starts the timer
        saver.flush()          # write now if a save is pending
    """

    def __init__(
        self,
        write: Callable[[], object],
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        """Initialize DebouncedSaver.

        Args:
            write: Performs one full write; raises PersistenceError on failure
            delay: Quiet period in seconds before the write happens
            loop: Event loop for the timer (default: the running loop)
        """
        if delay < 0:
            raise ValueError(f"Debounce delay must be non-negative, got {delay}")
        self._write = write
        self.delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

        self.writes = 0
        self.failures = 0
        self.last_error: PersistenceError | None = None

        self._saved_callbacks: list[Callable[[], None]] = []
        self._error_callbacks: list[Callable[[PersistenceError], None]] = []

    @property
    def pending(self) -> bool:
        """Whether a delayed write is outstanding."""
        return self._handle is not None

    def on_saved(self, callback: Callable[[], None]) -> None:
        """Register a callback fired after each successful write."""
        self._saved_callbacks.append(callback)

    def on_error(self, callback: Callable[[PersistenceError], None]) -> None:
        """Register a callback fired when a write fails."""
        self._error_callbacks.append(callback)

    def request_save(self) -> None:
        """Restart the delay timer. Cancels any outstanding request."""
        loop = self._loop or asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Pending save superseded")
        self._handle = loop.call_later(self.delay, self._on_timer)

    def cancel(self) -> bool:
        """Discard the pending save. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        logger.debug("Pending save discarded")
        return True

    def flush(self) -> bool:
        """Write immediately if a save is pending.

        Returns:
            True if a write was attempted and succeeded
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return self._perform_write()

    def save_now(self) -> bool:
        """Cancel any pending timer and write unconditionally."""
        self.cancel()
        return self._perform_write()

    def _on_timer(self) -> None:
        self._handle = None
        self._perform_write()

    def _perform_write(self) -> bool:
        try:
            self._write()
        except PersistenceError as e:
            self.failures += 1
            self.last_error = e
            logger.error(f"Save failed, will retry on next edit: {e}")
            for callback in self._error_callbacks:
                callback(e)
            return False

        self.writes += 1
        self.last_error = None
        for callback in self._saved_callbacks:
            callback()
        return True
