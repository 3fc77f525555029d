"""
Event targets for pointer, wheel and resize callbacks.

A Surface is the drawable canvas; a plain EventTarget stands in for the
window, which receives global clicks and resize notifications.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from vector_cloud.errors import ResourceInitError

POINTER_DOWN = "pointerdown"
POINTER_MOVE = "pointermove"
POINTER_UP = "pointerup"
CLICK = "click"
WHEEL = "wheel"
RESIZE = "resize"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer, click or wheel event in client (page) pixel coordinates."""
    type: str
    client_x: float = 0.0
    client_y: float = 0.0
    button: int = 0
    delta_y: float = 0.0


Listener = Callable[[PointerEvent], None]


class EventTarget:
    """Minimal listener registry with synchronous dispatch."""

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def add_listener(self, event_type: str, listener: Listener) -> None:
        if listener not in self._listeners[event_type]:
            self._listeners[event_type].append(listener)

    def remove_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch(self, event: PointerEvent) -> None:
        # Copy so listeners may unregister themselves while dispatching
        for listener in list(self._listeners.get(event.type, [])):
            listener(event)

    def listener_count(self, event_type: Optional[str] = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(listeners) for listeners in self._listeners.values())


class Surface(EventTarget):
    """
    Drawable canvas with a pixel size and a position on the page.

    Pointer events carry page coordinates; to_ndc() maps them into
    [-1, 1] x [-1, 1] with +y up.
    """

    def __init__(self, width: int, height: int, left: float = 0.0, top: float = 0.0):
        super().__init__()
        self.left = left
        self.top = top
        self.set_size(width, height)

    def set_size(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ResourceInitError(f"Surface must have a positive size, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def to_ndc(self, client_x: float, client_y: float) -> np.ndarray:
        x = (client_x - self.left) / self.width * 2 - 1
        y = -(client_y - self.top) / self.height * 2 + 1
        return np.array([x, y], dtype=np.float64)
