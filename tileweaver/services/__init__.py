"""Service layer for TileWeaver.

- DebouncedSaver: coalesces edits into one delayed write
- RegenerationOrchestrator: reload configuration, clear output, rerun generator
- EditSession: owns one editing session end to end
"""

from .persistence import DebouncedSaver, DEFAULT_DEBOUNCE_SECONDS
from .regeneration import RegenerationOrchestrator, Generator
from .session import EditSession, SessionNotLoadedError

__all__ = [
    "DebouncedSaver",
    "DEFAULT_DEBOUNCE_SECONDS",
    "RegenerationOrchestrator",
    "Generator",
    "EditSession",
    "SessionNotLoadedError",
]
