"""Core domain models for TileWeaver.

Pure data layer with no I/O: the tile document, the tile registry, the
weight codec, the error taxonomy and the direct-seek state machine.

Usage:
    from tileweaver.core import TileDocument, TileRegistry, parse_weight
"""

# Errors
from .errors import (
    TileWeaverError,
    ParseError,
    BindingError,
    FormatError,
    MissingGeneratorError,
    PersistenceError,
    GenerationError,
)

# Weights
from .weights import Weight, DEFAULT_WEIGHT, parse_weight, parse_primary, format_weight

# Document and registry
from .document import TileDocument
from .tiles import TileRecord, TileRegistry, RowBinding

# Direct seek
from .seek import DirectSeek, SeekState, PointerEvent, TrackRect

__all__ = [
    "TileWeaverError",
    "ParseError",
    "BindingError",
    "FormatError",
    "MissingGeneratorError",
    "PersistenceError",
    "GenerationError",
    "Weight",
    "DEFAULT_WEIGHT",
    "parse_weight",
    "parse_primary",
    "format_weight",
    "TileDocument",
    "TileRecord",
    "TileRegistry",
    "RowBinding",
    "DirectSeek",
    "SeekState",
    "PointerEvent",
    "TrackRect",
]
