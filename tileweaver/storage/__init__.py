"""Storage layer for TileWeaver.

Usage:
    store = DocumentStore(Path("resources"), "terrain")
    text = store.read()
    store.write(text)  # atomic replace + refresh notification
"""

from .document_store import DocumentStore, DOCUMENT_SUFFIX

__all__ = ["DocumentStore", "DOCUMENT_SUFFIX"]
