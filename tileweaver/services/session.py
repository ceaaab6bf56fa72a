"""Edit session.

The session owns everything one editing surface needs: the parsed document,
the tile registry, the row binder, the debounced saver and the regeneration
orchestrator. Nothing lives in module globals.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tileweaver.core.document import TileDocument
from tileweaver.core.tiles import TileRegistry
from tileweaver.observe.binder import RowBinder
from .persistence import DebouncedSaver
from .regeneration import RegenerationOrchestrator

if TYPE_CHECKING:
    from tileweaver.config import EditorSettings
    from tileweaver.observe.binder import RowHost
    from tileweaver.storage import DocumentStore
    from .regeneration import Generator

logger = logging.getLogger(__name__)


class SessionNotLoadedError(RuntimeError):
    """An edit was attempted before the document was loaded."""

    pass


class EditSession:
    """One tile-weight editing session.

    Usage:
        session = EditSession(settings, store, generator=generator)
        session.attach_host(host)
        session.load()
        session.set_weight("grass", 12)   # saved after the debounce delay
        session.regenerate()
    """

    def __init__(
        self,
        settings: "EditorSettings",
        store: "DocumentStore",
        generator: "Generator | None" = None,
        host: "RowHost | None" = None,
    ):
        """Initialize EditSession.

        Args:
            settings: Editor settings
            store: Storage for the tile document
            generator: Generator collaborator used by regenerate()
            host: Row host for the editable UI, if any
        """
        self.settings = settings
        self.store = store
        self._host = host
        self.document: TileDocument | None = None
        self.registry = TileRegistry()
        self.saver = DebouncedSaver(self._write_document, delay=settings.debounce_seconds)
        self.binder = RowBinder(
            self.registry,
            saver=self.saver,
            weight_min=settings.weight_min,
            weight_max=settings.weight_max,
        )
        self.orchestrator = RegenerationOrchestrator(
            store,
            generator=generator,
            saver=self.saver,
            flush_pending=settings.flush_before_regenerate,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def generator(self) -> "Generator | None":
        return self.orchestrator.generator

    @generator.setter
    def generator(self, generator: "Generator | None") -> None:
        self.orchestrator.generator = generator

    @property
    def is_loaded(self) -> bool:
        return self.document is not None

    @property
    def unbound_names(self) -> list[str]:
        """Tiles whose row could not be bound (only meaningful with a host)."""
        if self._host is None:
            return []
        return [record.name for record in self.registry if not record.is_bound]

    def attach_host(self, host: "RowHost") -> None:
        """Attach a row host. Rows are built on the next load."""
        self._host = host

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> int:
        """Load the stored document and rebuild the registry and rows.

        On failure the previous document, registry and rows are kept.

        Returns:
            Number of tiles loaded

        Raises:
            PersistenceError: If the document cannot be read
            ParseError: If the document is malformed
        """
        text = self.store.read()
        document = TileDocument.parse(text)

        self.document = document
        self.registry.load(document.entries())
        self.binder.document = document

        if self._host is not None:
            self.binder.bind_all(self._host)

        logger.info(f"Loaded {len(self.registry)} tiles from {self.store.path}")
        return len(self.registry)

    def reload(self) -> int:
        """Force a full reload from storage, bypassing the UI.

        A pending save is discarded so the stored document wins.
        """
        if self.saver.cancel():
            logger.warning("Discarded unsaved edits on reload")
        return self.load()

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def set_weight(self, name: str, value: float) -> str:
        """Edit a tile's primary weight by name.

        Returns:
            The new weight string

        Raises:
            SessionNotLoadedError: If nothing is loaded yet
            KeyError: If no tile has that name
        """
        if not self.is_loaded:
            raise SessionNotLoadedError("Load the document before editing")
        index = self.registry.index_of(name)
        return self.binder.commit(index, value)

    def save_now(self) -> bool:
        """Write the document immediately."""
        if not self.is_loaded:
            raise SessionNotLoadedError("Load the document before saving")
        return self.saver.save_now()

    def _write_document(self) -> None:
        if self.document is None:
            return
        self.store.write(self.document.serialize())

    # -------------------------------------------------------------------------
    # Regeneration
    # -------------------------------------------------------------------------

    def regenerate(self) -> int:
        """Regenerate output from the stored document. See RegenerationOrchestrator."""
        return self.orchestrator.regenerate()

    def close(self) -> None:
        """End the session, flushing any pending save."""
        if self.saver.pending:
            self.saver.flush()
        self.binder.unbind_all()
