"""Direct-seek slider widget.

A one-line slider whose whole track accepts presses: clicking anywhere jumps
the value there, dragging follows the pointer until release. Left/right keys
step by one.
"""

from __future__ import annotations

from typing import Any, Callable

from rich.text import Text
from textual import events
from textual.binding import Binding
from textual.widget import Widget

from tileweaver.core.seek import DirectSeek, PointerEvent, TrackRect


class SeekSlider(Widget, can_focus=True):
    """Slider with press-to-seek, exposing the editor's slider interface."""

    DEFAULT_CSS = """
    SeekSlider {
        height: 1;
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("left", "step(-1)", "Decrease", show=False),
        Binding("right", "step(1)", "Increase", show=False),
    ]

    def __init__(
        self,
        min_value: float = 0.0,
        max_value: float = 1.0,
        value: float | None = None,
        whole_numbers: bool = False,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        super().__init__(name=name, id=id, classes=classes)
        self._min_value = min_value
        self._max_value = max_value
        self._whole_numbers = whole_numbers
        self._slider_value = min_value if value is None else self._constrain(value)
        self._listeners: list[Callable[[float], None]] = []
        self._seek = DirectSeek(self, self)

    # -------------------------------------------------------------------------
    # Slider interface
    # -------------------------------------------------------------------------

    @property
    def min_value(self) -> float:
        return self._min_value

    @min_value.setter
    def min_value(self, value: float) -> None:
        self._min_value = value
        self._reconstrain()

    @property
    def max_value(self) -> float:
        return self._max_value

    @max_value.setter
    def max_value(self, value: float) -> None:
        self._max_value = value
        self._reconstrain()

    @property
    def whole_numbers(self) -> bool:
        return self._whole_numbers

    @whole_numbers.setter
    def whole_numbers(self, value: bool) -> None:
        self._whole_numbers = value
        self._reconstrain()

    @property
    def value(self) -> float:
        return self._slider_value

    @value.setter
    def value(self, value: float) -> None:
        self._set_value(value, notify=True)

    @property
    def is_pressed(self) -> bool:
        return self._seek.is_pressed

    def add_listener(self, callback: Callable[[float], None]) -> None:
        """Call `callback(value)` whenever the value changes."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[float], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _constrain(self, value: float) -> float:
        low, high = sorted((self._min_value, self._max_value))
        value = min(max(value, low), high)
        if self._whole_numbers:
            value = round(value)
        return value

    def _reconstrain(self) -> None:
        # Range changes never notify; they only keep the value inside bounds
        self._set_value(self._slider_value, notify=False)

    def _set_value(self, value: float, notify: bool) -> None:
        value = self._constrain(value)
        if value == self._slider_value:
            return
        self._slider_value = value
        if self.is_mounted:
            self.refresh()
        if notify:
            for callback in list(self._listeners):
                callback(value)

    # -------------------------------------------------------------------------
    # Screen mapping for DirectSeek
    # -------------------------------------------------------------------------

    def to_local(self, position: tuple[float, float], camera: Any) -> tuple[float, float] | None:
        region = self.content_region
        if region.width <= 0 or region.height <= 0:
            return None
        return (position[0] - region.x, position[1] - region.y)

    def track_rect(self) -> TrackRect:
        # The knob occupies one cell; the last cell maps to max_value
        return TrackRect(x_min=0, width=max(self.content_region.width - 1, 0))

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def on_mouse_down(self, event: events.MouseDown) -> None:
        self.capture_mouse()
        self._seek.pointer_down(PointerEvent((event.screen_x, event.screen_y)))
        event.stop()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self._seek.is_pressed:
            self._seek.drag(PointerEvent((event.screen_x, event.screen_y)))
            event.stop()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self._seek.is_pressed:
            self.release_mouse()
            self._seek.pointer_up(PointerEvent((event.screen_x, event.screen_y)))
            event.stop()

    def action_step(self, delta: int) -> None:
        self.value = self._slider_value + delta

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self) -> Text:
        width = max(self.content_size.width, 1)
        span = self._max_value - self._min_value
        pct = 0.0 if span == 0 else (self._slider_value - self._min_value) / span
        knob = round(pct * (width - 1))

        text = Text()
        text.append("━" * knob, style="bold cyan")
        text.append("●", style="bold white" if self.has_focus else "white")
        text.append("─" * (width - knob - 1), style="bright_black")
        return text
