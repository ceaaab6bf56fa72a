"""Regeneration orchestrator.

Applies the latest stored configuration and reruns the generator:

1. Fail fast if no generator is configured (no side effects)
2. Flush a pending save so the stored document is quiesced
3. Read the stored document and hand it to the generator
4. Clear every previously generated element
5. generate() then run()
"""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol, TYPE_CHECKING

from tileweaver.core.errors import MissingGeneratorError
from tileweaver.logging_config import log_regenerate

if TYPE_CHECKING:
    from tileweaver.storage import DocumentStore
    from tileweaver.services.persistence import DebouncedSaver

logger = logging.getLogger(__name__)


class Generator(Protocol):
    """The external content generator."""

    config: str | None
    output: list[Any]

    def reload(self, config: str) -> None:
        ...

    def generate(self) -> None:
        ...

    def run(self) -> Any:
        ...


class RegenerationOrchestrator:
    """Clean regeneration cycles against a generator."""

    def __init__(
        self,
        store: "DocumentStore",
        generator: Generator | None = None,
        saver: "DebouncedSaver | None" = None,
        flush_pending: bool = True,
    ):
        """Initialize RegenerationOrchestrator.

        Args:
            store: Where the freshest configuration is read from
            generator: Generator collaborator, or None until configured
            saver: Debounced saver whose pending write is flushed first
            flush_pending: Flush a pending save before reading the store
        """
        self._store = store
        self.generator = generator
        self._saver = saver
        self.flush_pending = flush_pending
        self.cycles = 0

    def regenerate(self) -> int:
        """Run one regeneration cycle.

        Returns:
            Number of elements in the new output

        Raises:
            MissingGeneratorError: If no generator is configured
            PersistenceError: If the stored document cannot be read
            ParseError: If the stored document does not decode or the generator rejects it
        """
        generator = self.generator
        if generator is None:
            logger.error("Regeneration requested but no generator is configured")
            raise MissingGeneratorError("No generator configured")

        started = time.monotonic()

        if self._saver is not None and self._saver.pending:
            if self.flush_pending:
                logger.info("Flushing pending save before regeneration")
                self._saver.flush()
            else:
                logger.warning("Regenerating while a save is pending; stored document may be stale")

        config = self._store.read()
        generator.reload(config)

        removed = self._clear_output(generator)

        generator.generate()
        generator.run()

        self.cycles += 1
        produced = len(generator.output)
        duration_ms = int((time.monotonic() - started) * 1000)
        log_regenerate(logger, "OK", removed=removed, produced=produced, duration_ms=duration_ms)
        return produced

    @staticmethod
    def _clear_output(generator: Generator) -> int:
        """Remove every previously generated element. Returns the count removed."""
        output = generator.output
        removed = len(output)
        for element in list(output):
            destroy = getattr(element, "destroy", None)
            if callable(destroy):
                destroy()
        output.clear()
        return removed
