"""Main TUI application for TileWeaver.

Edits tile weights with direct-seek sliders, saves them after a short quiet
period and regenerates output on demand.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Footer

from tileweaver.core.errors import (
    GenerationError,
    MissingGeneratorError,
    ParseError,
    PersistenceError,
)
from tileweaver.services.session import SessionNotLoadedError
from .host import TextualRowHost
from .widgets import EditorHeader, OutputView

if TYPE_CHECKING:
    from tileweaver.services.session import EditSession

logger = logging.getLogger(__name__)


class TileWeaverTUI(App):
    """Tile weight editor.

    Rows on the left edit one tile weight each; the generated output is shown
    on the right. Errors show up as notifications and never close the app.
    """

    CSS_PATH = "theme.tcss"
    TITLE = "TileWeaver"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("g", "regenerate", "Regenerate"),
        Binding("r", "reload", "Reload"),
        Binding("s", "save", "Save"),
    ]

    def __init__(self, session: "EditSession"):
        """Initialize TileWeaverTUI.

        Args:
            session: Edit session; rows are bound to this app on mount
        """
        super().__init__()
        self._session = session

    @property
    def session(self) -> "EditSession":
        return self._session

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield EditorHeader(id="header")
        with Horizontal(id="main"):
            with Vertical(id="editor"):
                yield VerticalScroll(id="rows")
                yield Button("Regenerate", id="regenerate", variant="primary")
            yield OutputView(id="output")
        yield Footer()

    def on_mount(self) -> None:
        """Bind rows to the session and load the document."""
        rows = self.query_one("#rows", VerticalScroll)
        self._session.attach_host(TextualRowHost(rows))

        self._session.saver.on_saved(self._on_saved)
        self._session.saver.on_error(self._on_save_error)

        header = self.query_one("#header", EditorHeader)
        header.update_state(document=str(self._session.store.path))

        self._load(initial=True)
        self.set_interval(0.2, self._update_status)

    def on_unmount(self) -> None:
        """Write any pending edit before exiting."""
        if self._session.saver.pending:
            self._session.saver.flush()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _load(self, initial: bool) -> None:
        header = self.query_one("#header", EditorHeader)
        try:
            count = self._session.load() if initial else self._session.reload()
        except (ParseError, PersistenceError) as e:
            logger.error(f"Load failed: {e}")
            self.notify(str(e), title="Load failed", severity="error", timeout=10)
            if initial:
                header.update_state(status="LOAD FAILED")
            return

        header.update_state(tiles=count, status="LOADED")

        unbound = self._session.unbound_names
        if unbound:
            self.notify(
                f"Rows not bound: {', '.join(unbound)}",
                title="Row template problem",
                severity="warning",
            )

    # -------------------------------------------------------------------------
    # Session callbacks
    # -------------------------------------------------------------------------

    def _on_saved(self) -> None:
        header = self.query_one("#header", EditorHeader)
        header.update_state(
            saves=self._session.saver.writes,
            last_saved=datetime.now().strftime("%H:%M:%S"),
        )

    def _on_save_error(self, error: PersistenceError) -> None:
        self.notify(str(error), title="Save failed", severity="error", timeout=10)

    def _update_status(self) -> None:
        header = self.query_one("#header", EditorHeader)
        if not self._session.is_loaded:
            return
        if self._session.saver.pending:
            header.update_state(status="EDITING")
        elif self._session.saver.last_error is not None:
            header.update_state(status="UNSAVED")
        else:
            header.update_state(status="SAVED" if self._session.saver.writes else "LOADED")

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "regenerate":
            self.action_regenerate()

    def action_regenerate(self) -> None:
        """Regenerate output from the stored document."""
        try:
            produced = self._session.regenerate()
        except MissingGeneratorError as e:
            self.notify(str(e), title="Regenerate", severity="warning")
            return
        except (GenerationError, ParseError, PersistenceError) as e:
            logger.error(f"Regeneration failed: {e}")
            self.notify(str(e), title="Regenerate failed", severity="error", timeout=10)
            return

        output = self.query_one("#output", OutputView)
        output.update_output(self._session.generator)
        self.notify(f"Generated {produced} tiles", title="Regenerate")

    def action_reload(self) -> None:
        """Reload the document from storage, replacing every row."""
        self._load(initial=False)

    def action_save(self) -> None:
        """Write the document now."""
        try:
            self._session.save_now()
        except SessionNotLoadedError as e:
            self.notify(str(e), severity="warning")


async def run_tui(session: "EditSession") -> None:
    """Run the TUI application.

    Args:
        session: Edit session to drive
    """
    app = TileWeaverTUI(session)
    await app.run_async()
