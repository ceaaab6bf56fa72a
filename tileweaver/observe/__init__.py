"""Observer layer for TileWeaver.

The row binder translates between tile records and editable rows. The
Textual host lives in tileweaver.observe.tui.
"""

from .binder import RowBinder, RowHost, RowTemplate, ROW_PARTS, NAME_PART, SLIDER_PART, WEIGHT_PART

__all__ = [
    "RowBinder",
    "RowHost",
    "RowTemplate",
    "ROW_PARTS",
    "NAME_PART",
    "SLIDER_PART",
    "WEIGHT_PART",
]
