"""Direct-seek input for sliders.

A press anywhere along a slider's track jumps the value to that point, and
dragging keeps following the pointer until release:

    IDLE --pointer_down--> PRESSED --drag--> PRESSED --pointer_up--> IDLE

This module is host-agnostic. A host supplies the slider (min_value,
max_value, value) and a mapper that converts screen positions into the
slider's local space.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, NamedTuple, Protocol


class SeekState(Enum):
    """Pointer state of a direct-seek slider."""
    IDLE = auto()
    PRESSED = auto()


class PointerEvent(NamedTuple):
    """A pointer event in screen space.

    Attributes:
        position: (x, y) screen position
        camera: Viewport context needed to resolve the position, if any
    """

    position: tuple[float, float]
    camera: Any = None


class TrackRect(NamedTuple):
    """The slider track in local coordinates."""

    x_min: float
    width: float


class SeekableSlider(Protocol):
    min_value: float
    max_value: float
    value: float


class LocalMapper(Protocol):
    """Maps screen positions into a slider's local space."""

    def to_local(self, position: tuple[float, float], camera: Any) -> tuple[float, float] | None:
        """Return the local point, or None if it cannot be resolved."""
        ...

    def track_rect(self) -> TrackRect:
        ...


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


class DirectSeek:
    """Pointer-to-value adapter for one slider."""

    def __init__(self, slider: SeekableSlider, mapper: LocalMapper):
        self._slider = slider
        self._mapper = mapper
        self.state = SeekState.IDLE

    @property
    def is_pressed(self) -> bool:
        return self.state == SeekState.PRESSED

    def pointer_down(self, event: PointerEvent) -> bool:
        """Start a press and jump to the pointer. Returns True if the value was applied."""
        self.state = SeekState.PRESSED
        return self._apply(event)

    def drag(self, event: PointerEvent) -> bool:
        """Follow the pointer while pressed."""
        if self.state != SeekState.PRESSED:
            return False
        return self._apply(event)

    def pointer_up(self, event: PointerEvent | None = None) -> None:
        self.state = SeekState.IDLE

    def value_at(self, event: PointerEvent) -> float | None:
        """Compute the slider value under the pointer, or None if unmappable."""
        local = self._mapper.to_local(event.position, event.camera)
        if local is None:
            return None

        rect = self._mapper.track_rect()
        if rect.width <= 0:
            return None

        pct = clamp01((local[0] - rect.x_min) / rect.width)
        return lerp(self._slider.min_value, self._slider.max_value, pct)

    def _apply(self, event: PointerEvent) -> bool:
        value = self.value_at(event)
        if value is None:
            return False
        self._slider.value = value
        return True
