"""Error taxonomy for TileWeaver.

Load-time structural errors (ParseError) abort a load. Per-row errors
(BindingError, FormatError) and per-write errors (PersistenceError) are
isolated and logged by their callers so the editing session keeps running.
"""

from __future__ import annotations

from pathlib import Path


class TileWeaverError(Exception):
    """Base exception for all TileWeaver errors."""

    pass


class ParseError(TileWeaverError):
    """The configuration document is not well-formed."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ):
        super().__init__(message)
        self.line = line
        self.column = column


class BindingError(TileWeaverError):
    """A row template is missing one of its named parts."""

    def __init__(self, message: str, tile: str | None = None, part: str | None = None):
        super().__init__(message)
        self.tile = tile
        self.part = part


class FormatError(TileWeaverError):
    """A weight value cannot be parsed or represented."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class MissingGeneratorError(TileWeaverError):
    """Regeneration was requested with no generator configured."""

    pass


class PersistenceError(TileWeaverError):
    """Reading or writing the stored document failed."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class GenerationError(TileWeaverError):
    """The generator could not produce output for the current tileset."""

    pass
