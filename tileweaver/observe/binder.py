"""Row binder: the thin layer between tile records and editable rows.

For each record the binder asks the host for a row, finds the row's three
named parts, seeds them from the record and listens for slider changes.
A slider change flows back as: registry -> weight label -> document ->
debounced save.

Hosts implement RowHost; rows implement RowTemplate. The Textual host lives
in tileweaver.observe.tui; tests use plain fakes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, TYPE_CHECKING

from tileweaver.core.errors import BindingError, FormatError
from tileweaver.core.tiles import RowBinding, TileRecord
from tileweaver.logging_config import log_edit

if TYPE_CHECKING:
    from tileweaver.core.document import TileDocument
    from tileweaver.core.tiles import TileRegistry
    from tileweaver.services.persistence import DebouncedSaver

logger = logging.getLogger(__name__)

# Named parts every row template must provide
NAME_PART = "NameText"
SLIDER_PART = "WeightSlider"
WEIGHT_PART = "WeightText"
ROW_PARTS = (NAME_PART, SLIDER_PART, WEIGHT_PART)

WEIGHT_MIN = 0
WEIGHT_MAX = 20


class LabelControl(Protocol):
    def set_text(self, text: str) -> None:
        ...


class SliderControl(Protocol):
    min_value: float
    max_value: float
    whole_numbers: bool
    value: float

    def add_listener(self, callback: Callable[[float], None]) -> None:
        ...


class RowTemplate(Protocol):
    def find(self, part: str) -> Any | None:
        """Return the named sub-control, or None if missing."""
        ...


class RowHost(Protocol):
    """Creates and destroys rows.

    A host may also offer `clear_rows()`, which removes every row it created
    in one step; the binder prefers it over per-row destruction on rebuild.
    """

    def create_row(self) -> RowTemplate:
        ...

    def destroy_row(self, row: RowTemplate) -> None:
        ...


class RowBinder:
    """Creates and wires one editable row per tile record."""

    def __init__(
        self,
        registry: "TileRegistry",
        document: "TileDocument | None" = None,
        saver: "DebouncedSaver | None" = None,
        weight_min: int = WEIGHT_MIN,
        weight_max: int = WEIGHT_MAX,
    ):
        """Initialize RowBinder.

        Args:
            registry: Records to bind
            document: Document kept in sync on every edit
            saver: Saver asked for a debounced write on every edit
            weight_min: Slider minimum
            weight_max: Slider maximum
        """
        if weight_min > weight_max:
            raise ValueError(f"Invalid weight range [{weight_min}, {weight_max}]")
        self._registry = registry
        self.document = document
        self._saver = saver
        self.weight_min = weight_min
        self.weight_max = weight_max
        self._host: RowHost | None = None
        self._rows: list[RowTemplate] = []
        self._bound: list[TileRecord] = []
        self.binding_errors: list[BindingError] = []

    @property
    def rows(self) -> list[RowTemplate]:
        return list(self._rows)

    @property
    def bound_count(self) -> int:
        return sum(1 for record in self._registry if record.is_bound)

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def bind_all(self, host: RowHost) -> int:
        """Rebuild the row set for the current registry.

        Every previously created row is destroyed first.

        Returns:
            Number of rows bound
        """
        self.unbind_all()
        self._host = host
        self.binding_errors = []

        for index, record in enumerate(self._registry):
            try:
                self._bind_row(host, index, record)
            except BindingError as e:
                self.binding_errors.append(e)
                logger.error(f"Row for tile '{record.name}' skipped: {e}")

        bound = self.bound_count
        logger.info(f"Bound {bound}/{len(self._registry)} tile rows")
        return bound

    def unbind_all(self) -> None:
        """Destroy every created row and drop record bindings."""
        if self._host is not None and self._rows:
            clear_rows = getattr(self._host, "clear_rows", None)
            if clear_rows is not None:
                clear_rows()
            else:
                for row in self._rows:
                    self._host.destroy_row(row)
        self._rows.clear()
        for record in self._bound:
            record.binding = None
        self._bound.clear()

    def _bind_row(self, host: RowHost, index: int, record: TileRecord) -> None:
        row = host.create_row()
        self._rows.append(row)

        parts = {part: row.find(part) for part in ROW_PARTS}
        missing = [part for part, control in parts.items() if control is None]
        if missing:
            host.destroy_row(row)
            self._rows.remove(row)
            raise BindingError(
                f"Row template is missing {', '.join(missing)}",
                tile=record.name,
                part=missing[0],
            )

        name_label = parts[NAME_PART]
        slider = parts[SLIDER_PART]
        weight_label = parts[WEIGHT_PART]

        slider.min_value = self.weight_min
        slider.max_value = self.weight_max
        slider.whole_numbers = True

        name_label.set_text(record.name)
        weight_label.set_text(record.weight)

        try:
            slider.value = record.primary
        except FormatError as e:
            logger.error(f"Tile '{record.name}' has an unreadable weight {record.weight!r}: {e}")

        record.binding = RowBinding(
            row=row,
            name_label=name_label,
            slider=slider,
            weight_label=weight_label,
        )
        self._bound.append(record)
        slider.add_listener(lambda value, index=index: self._on_value_changed(index, value))

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def _on_value_changed(self, index: int, value: float) -> None:
        self.apply_edit(index, value)

    def commit(self, index: int, value: float) -> str:
        """Edit a weight as if the row's slider moved.

        A bound row routes through its slider so the control stays in step;
        an unbound record is edited directly.

        Returns:
            The record's weight string after the edit
        """
        record = self._registry.get(index)
        if record.binding is not None:
            before = record.binding.slider.value
            record.binding.slider.value = value
            if record.binding.slider.value == before:
                # Slider did not move, so no notification fired
                self.apply_edit(index, value)
            return record.weight
        return self.apply_edit(index, value)

    def apply_edit(self, index: int, value: float) -> str:
        """Round, clamp and store an edited value, then sync and persist."""
        primary = min(max(round(value), self.weight_min), self.weight_max)
        weight = self._registry.set_weight_primary(index, primary)
        record = self._registry.get(index)

        if record.binding is not None:
            record.binding.weight_label.set_text(weight)

        log_edit(logger, record.name, weight)

        if self.document is not None:
            self.document.apply(self._registry)
        if self._saver is not None:
            self._saver.request_save()
        return weight
