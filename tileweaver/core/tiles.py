"""Tile records and the in-memory tile registry.

The registry is the source of truth during an edit session. It is replaced
wholesale on every load and never merged with a previous state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from .errors import FormatError
from .weights import format_weight, parse_weight, Weight


@dataclass
class RowBinding:
    """Transient view handles for a bound tile row."""

    row: Any
    name_label: Any
    slider: Any
    weight_label: Any


@dataclass
class TileRecord:
    """A named tile with its selection weight.

    Attributes:
        name: Unique tile identifier
        weight: Weight in "P,S" form, kept verbatim until edited
        binding: View handles while a row is bound (never persisted)
    """

    name: str
    weight: str
    binding: RowBinding | None = field(default=None, repr=False, compare=False)

    @property
    def parsed_weight(self) -> Weight:
        """The parsed weight pair. Raises FormatError if unparsable."""
        return parse_weight(self.weight)

    @property
    def primary(self) -> int:
        return self.parsed_weight.primary

    @property
    def is_bound(self) -> bool:
        return self.binding is not None


class TileRegistry:
    """Ordered list of tile records for one editing session."""

    def __init__(self):
        self._records: list[TileRecord] = []

    def load(self, entries: Iterable[tuple[str, str]]) -> None:
        """Replace the registry with fresh records.

        Args:
            entries: Ordered (name, weight) pairs
        """
        records = [TileRecord(name=name, weight=weight) for name, weight in entries]
        self._records.clear()
        self._records.extend(records)

    def clear(self) -> None:
        self._records.clear()

    def get(self, index: int) -> TileRecord:
        """Get a record by position. Raises IndexError if out of range."""
        if index < 0 or index >= len(self._records):
            raise IndexError(f"No tile at index {index}")
        return self._records[index]

    def index_of(self, name: str) -> int:
        """Get the position of a tile by name. Raises KeyError if unknown."""
        for index, record in enumerate(self._records):
            if record.name == name:
                return index
        raise KeyError(name)

    def find(self, name: str) -> TileRecord | None:
        """Get a record by name, or None."""
        for record in self._records:
            if record.name == name:
                return record
        return None

    def set_weight_primary(self, index: int, value: int | float) -> str:
        """Set the primary weight of a record.

        Args:
            index: Record position
            value: New primary weight; must be a non-negative integer value

        Returns:
            The new weight string ("<value>,0")

        Raises:
            FormatError: If value is not representable as a non-negative integer
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise FormatError(f"Weight must be a number, got {value!r}", value=value)
        if isinstance(value, float) and not value.is_integer():
            raise FormatError(f"Weight must be a whole number, got {value!r}", value=value)
        if value < 0:
            raise FormatError(f"Weight must be non-negative, got {value!r}", value=value)

        record = self.get(index)
        record.weight = format_weight(int(value))
        return record.weight

    @property
    def records(self) -> list[TileRecord]:
        """Copy of the records in order."""
        return list(self._records)

    @property
    def names(self) -> list[str]:
        return [record.name for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TileRecord]:
        return iter(self._records)
