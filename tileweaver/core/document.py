"""Configuration document model.

Wraps an XML tile-set document. Tiles are the `tile` elements found anywhere
in the tree; each carries a `name` and an optional `weight` attribute:

    <set>
      <tiles>
        <tile name="grass" weight="4,0" />
        <tile name="water" weight="1,0" />
      </tiles>
    </set>

Only the `weight` attribute is ever rewritten. Serialization starts from the
source text and splices changed weight values into the matching start tags,
so everything else (prolog, DOCTYPE, comments, quoting, whitespace) comes
back byte for byte.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Iterable, TYPE_CHECKING
from xml.parsers import expat
from xml.sax.saxutils import escape

from .errors import ParseError
from .weights import DEFAULT_WEIGHT

if TYPE_CHECKING:
    from .tiles import TileRecord

logger = logging.getLogger(__name__)

TILE_TAG = "tile"
NAME_ATTR = "name"
WEIGHT_ATTR = "weight"

# One attribute inside a start tag: name, quote char, raw value
_ATTR_RE = re.compile(rb"""([^\s=/>]+)\s*=\s*(["'])(.*?)\2""", re.DOTALL)
_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def _tile_offsets(text: str) -> list[int]:
    """Byte offsets (into the UTF-8 text) of every tile start tag, in document order."""
    offsets: list[int] = []
    # Same expanded-name rules as ElementTree, so namespaced tiles are skipped by both
    parser = expat.ParserCreate(namespace_separator="}")

    def start(name, attrs):
        if name == TILE_TAG:
            offsets.append(parser.CurrentByteIndex)

    parser.StartElementHandler = start
    parser.Parse(text, True)
    return offsets


def _tag_end(raw: bytes, start: int) -> int:
    """Index of the `>` closing the start tag at `start`."""
    quote = None
    for index in range(start, len(raw)):
        char = raw[index:index + 1]
        if quote:
            if char == quote:
                quote = None
        elif char in (b'"', b"'"):
            quote = char
        elif char == b">":
            return index
    raise ValueError(f"Unterminated start tag at byte {start}")


def _splice_weight(raw: bytes, start: int, weight: str) -> bytes:
    """Set the weight attribute of the start tag at `start`, keeping its quoting."""
    end = _tag_end(raw, start)
    tag = raw[start:end]
    for match in _ATTR_RE.finditer(tag, 1 + len(TILE_TAG)):
        if match.group(1) == WEIGHT_ATTR.encode():
            value = escape(weight, _ENTITIES).encode("utf-8")
            return raw[:start + match.start(3)] + value + raw[start + match.end(3):]

    pos = end
    if raw[pos - 1:pos] == b"/":
        pos -= 1
    while pos > start and raw[pos - 1:pos].isspace():
        pos -= 1
    attr = f' {WEIGHT_ATTR}="{escape(weight, _ENTITIES)}"'.encode("utf-8")
    return raw[:pos] + attr + raw[pos:]


class TileDocument:
    """An XML tile-set document with index-aligned tile elements.

    Usage:
        doc = TileDocument.parse(text)
        entries = doc.entries()       # [(name, weight), ...]
        doc.apply(registry.records)   # write weights back, by position
        text = doc.serialize()
    """

    def __init__(self, root: ET.Element, source: str, offsets: list[int]):
        """Initialize TileDocument.

        Args:
            root: Root element of the parsed tree
            source: The text the tree was parsed from
            offsets: Byte offset of every tile start tag in the UTF-8 source,
                aligned with `root.iter("tile")`
        """
        self._root = root
        self._source = source
        self._elements: list[ET.Element] = []
        self._offsets: list[int] = []
        self._original: list[str | None] = []
        self._collect_tiles(offsets)

    @classmethod
    def parse(cls, text: str) -> TileDocument:
        """Parse document text.

        Raises:
            ParseError: If the text is not well-formed XML
        """
        parser = ET.XMLParser()
        try:
            parser.feed(text)
            root = parser.close()
        except ET.ParseError as e:
            line, column = e.position
            raise ParseError(f"Malformed tile document: {e}", line=line, column=column) from e
        return cls(root, text, _tile_offsets(text))

    def _collect_tiles(self, offsets: list[int]) -> None:
        """Collect named tile elements in document order."""
        seen: set[str] = set()
        for element, offset in zip(self._root.iter(TILE_TAG), offsets):
            name = element.get(NAME_ATTR)
            if not name:
                logger.warning("Skipping tile element without a name")
                continue
            if name in seen:
                logger.warning(f"Duplicate tile name in document: {name}")
            seen.add(name)
            self._elements.append(element)
            self._offsets.append(offset)
            self._original.append(element.get(WEIGHT_ATTR))

    @property
    def root(self) -> ET.Element:
        return self._root

    def __len__(self) -> int:
        return len(self._elements)

    def entries(self) -> list[tuple[str, str]]:
        """Get the ordered (name, weight) list. Missing weights default to "1,0"."""
        return [
            (element.get(NAME_ATTR), element.get(WEIGHT_ATTR, DEFAULT_WEIGHT))
            for element in self._elements
        ]

    def apply(self, records: Iterable["TileRecord"]) -> int:
        """Write record weights back onto the tile elements, by position.

        An element without a `weight` attribute only gains one when the
        record's weight differs from the default.

        Args:
            records: Records in registry order

        Returns:
            Number of elements whose weight attribute changed

        Raises:
            ValueError: If the record count does not match the element count
        """
        records = list(records)
        if len(records) != len(self._elements):
            raise ValueError(
                f"Registry has {len(records)} records but document has "
                f"{len(self._elements)} tile elements"
            )

        changed = 0
        for element, record in zip(self._elements, records):
            current = element.get(WEIGHT_ATTR)
            if current is None and record.weight == DEFAULT_WEIGHT:
                continue
            if current != record.weight:
                element.set(WEIGHT_ATTR, record.weight)
                changed += 1
        return changed

    def serialize(self) -> str:
        """Serialize the full document for storage.

        The source text is returned with only the changed weight values
        replaced. An unedited document serializes to exactly its source.
        """
        edits = [
            (offset, element.get(WEIGHT_ATTR))
            for element, offset, original in zip(self._elements, self._offsets, self._original)
            if element.get(WEIGHT_ATTR) not in (None, original)
        ]
        if not edits:
            return self._source

        raw = self._source.encode("utf-8")
        # Back to front, so earlier offsets stay valid
        for offset, weight in sorted(edits, reverse=True):
            raw = _splice_weight(raw, offset, weight)
        return raw.decode("utf-8")
