"""
Interaction controller: pointer move sets hover, click sets selection.
"""

import logging
from typing import Callable, Optional

from vector_cloud.core.model import NO_INDEX, PointCloudModel
from vector_cloud.interaction.picking import PickingEngine
from vector_cloud.visualization.camera import CameraSnapshot
from vector_cloud.visualization.events import CLICK, POINTER_MOVE, EventTarget, PointerEvent, Surface
from vector_cloud.visualization.shader import HighlightShader

logger = logging.getLogger(__name__)

LabelCallback = Callable[[str], None]


class InteractionController:
    """
    Binds pointer events to picking results.

    Hover and selection are independent: clicking does not clear hover,
    and moving away does not clear a selection. Clicks are taken from the
    window, so a click anywhere on the page updates the selection.
    """

    def __init__(
        self,
        surface: Surface,
        picking: PickingEngine,
        snapshot_provider: Callable[[], CameraSnapshot],
        on_label: Optional[LabelCallback] = None,
    ):
        self.surface = surface
        self.picking = picking
        self.snapshot_provider = snapshot_provider
        self.on_label = on_label

        self.model: Optional[PointCloudModel] = None
        self.shader: Optional[HighlightShader] = None
        self._window: Optional[EventTarget] = None

    def attach(self, model: Optional[PointCloudModel], shader: Optional[HighlightShader]) -> None:
        """Point the controller at the current batch (or none)."""
        self.model = model
        self.shader = shader

    def bind(self, window: EventTarget) -> None:
        self.surface.add_listener(POINTER_MOVE, self.on_pointer_move)
        window.add_listener(CLICK, self.on_click)
        self._window = window

    def unbind(self) -> None:
        self.surface.remove_listener(POINTER_MOVE, self.on_pointer_move)
        if self._window is not None:
            self._window.remove_listener(CLICK, self.on_click)
            self._window = None

    def _pick(self, event: PointerEvent) -> int:
        pointer = self.surface.to_ndc(event.client_x, event.client_y)
        index = self.picking.pick(pointer, self.snapshot_provider(), self.model.positions)
        return NO_INDEX if index is None else index

    def _emit_label(self) -> None:
        if self.on_label is not None:
            self.on_label(self.model.display_label())

    def on_pointer_move(self, event: PointerEvent) -> None:
        if self.model is None:
            return
        index = self._pick(event)
        if index == self.model.highlight.hovered:
            return

        self.model.highlight.hovered = index
        if self.shader is not None:
            self.shader.uniforms["hovered_index"].value = float(index)
        self._emit_label()

    def on_click(self, event: PointerEvent) -> None:
        if self.model is None:
            return
        self.select(self._pick(event))

    def select(self, index: int) -> None:
        """Pin a selection by index, or clear it with NO_INDEX."""
        if self.model is None:
            return
        if index != NO_INDEX and not self.model.is_valid_index(index):
            raise IndexError(f"No point at index {index}")

        self.model.highlight.selected = index
        if self.shader is not None:
            self.shader.uniforms["selected_index"].value = float(index)
        logger.debug(f"Selected index {index}")
        self._emit_label()

    def clear_hover(self) -> None:
        """Drop the hovered index, as when the pointer leaves the canvas."""
        if self.model is None or not self.model.highlight.has_hover:
            return
        self.model.highlight.hovered = NO_INDEX
        if self.shader is not None:
            self.shader.uniforms["hovered_index"].value = float(NO_INDEX)
        self._emit_label()
