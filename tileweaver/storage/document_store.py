"""File-backed storage for the tile document.

The document lives at `<resources_dir>/<name>.xml`. Writes go through a
temporary file and an atomic replace, then notify refresh listeners so any
collaborator watching storage can pick up the new text.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Callable

from tileweaver.core.errors import ParseError, PersistenceError
from tileweaver.logging_config import log_storage

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".xml"
DEFAULT_ENCODING = "utf-8"

# Encoding named by the XML declaration; a UTF-8 BOM may precede it
_ENCODING_RE = re.compile(
    r"""^(?:\ufeff|\xef\xbb\xbf)?\s*<\?xml\b[^>]*?\bencoding\s*=\s*["']([A-Za-z][\w.-]*)["']"""
)


def declared_encoding(head: str | bytes) -> str:
    """Encoding named by the document's XML declaration, or UTF-8."""
    if isinstance(head, bytes):
        head = head[:512].decode("latin-1")
    match = _ENCODING_RE.match(head)
    return match.group(1) if match else DEFAULT_ENCODING


class DocumentStore:
    """Reads and writes one named tile document."""

    def __init__(self, resources_dir: Path, name: str):
        """Initialize DocumentStore.

        Args:
            resources_dir: Directory holding the document
            name: Logical document name (the file stem)
        """
        self.resources_dir = Path(resources_dir)
        self.name = name
        self.writes = 0
        self._refresh_callbacks: list[Callable[[Path], None]] = []

    @property
    def path(self) -> Path:
        """Path derived from the document's logical name."""
        return self.resources_dir / f"{self.name}{DOCUMENT_SUFFIX}"

    def exists(self) -> bool:
        return self.path.exists()

    def on_refresh(self, callback: Callable[[Path], None]) -> None:
        """Register a callback fired after every successful write."""
        self._refresh_callbacks.append(callback)

    def read(self) -> str:
        """Read the stored document text.

        Bytes are decoded with the encoding the XML declaration names,
        UTF-8 when there is none.

        Raises:
            PersistenceError: If the file cannot be read
            ParseError: If the bytes do not decode in the declared encoding
        """
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            log_storage(logger, "read", self.path, success=False, details=str(e))
            raise PersistenceError(f"Cannot read {self.path}: {e}", path=self.path) from e

        encoding = declared_encoding(raw)
        try:
            text = raw.decode(encoding)
        except LookupError as e:
            log_storage(logger, "read", self.path, success=False, details=str(e))
            raise ParseError(f"Unknown encoding {encoding!r} declared in {self.path}") from e
        except UnicodeDecodeError as e:
            log_storage(logger, "read", self.path, success=False, details=str(e))
            line_start = raw.rfind(b"\n", 0, e.start) + 1
            raise ParseError(
                f"{self.path} is not valid {encoding}: {e.reason} at byte {e.start}",
                line=raw.count(b"\n", 0, e.start) + 1,
                column=e.start - line_start,
            ) from e

        log_storage(logger, "read", self.path, details=f"{len(text)} chars")
        return text

    def write(self, text: str) -> Path:
        """Write the full document text, replacing the stored file.

        Returns:
            Path written

        Raises:
            PersistenceError: If the file cannot be written
        """
        encoding = declared_encoding(text)
        try:
            data = text.encode(encoding)
        except (LookupError, UnicodeEncodeError) as e:
            log_storage(logger, "write", self.path, success=False, details=str(e))
            raise PersistenceError(
                f"Cannot encode {self.path} as {encoding}: {e}", path=self.path
            ) from e

        try:
            self.resources_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.name}.", suffix=".tmp", dir=self.resources_dir
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            log_storage(logger, "write", self.path, success=False, details=str(e))
            raise PersistenceError(f"Cannot write {self.path}: {e}", path=self.path) from e

        self.writes += 1
        log_storage(logger, "write", self.path, details=f"{len(text)} chars")
        logger.info(f"Document saved: {self.path}")
        self._notify_refresh()
        return self.path

    def _notify_refresh(self) -> None:
        for callback in self._refresh_callbacks:
            try:
                callback(self.path)
            except Exception:
                logger.exception("Refresh callback failed")
