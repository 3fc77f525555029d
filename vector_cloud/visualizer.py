"""
EmbeddingVisualizer: the single owner of scene, controls, interaction and loop.

All callbacks run on one thread. Loading a batch replaces geometry and
resets highlight state before any later frame or pointer callback runs.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from vector_cloud.core.model import NO_INDEX, EmbeddingBatch, PointCloudModel
from vector_cloud.core.normalizer import normalize
from vector_cloud.core.projector import PCAProjector
from vector_cloud.interaction.controller import InteractionController, LabelCallback
from vector_cloud.interaction.picking import PickingEngine
from vector_cloud.visualization.controls import OrbitControls
from vector_cloud.visualization.events import CLICK, POINTER_MOVE, RESIZE, EventTarget, PointerEvent, Surface
from vector_cloud.visualization.loop import FrameScheduler, RenderLoop
from vector_cloud.visualization.device import SoftwareDevice
from vector_cloud.visualization.scene import DeviceFactory, SceneGraph

logger = logging.getLogger(__name__)


class EmbeddingVisualizer:
    """
    Interactive 3D point cloud of an embedding batch.

    Usage:
        with EmbeddingVisualizer(surface, window, scheduler) as viz:
            viz.load_batch(labels, vectors)
            scheduler.run_pending()
    """

    def __init__(
        self,
        surface: Surface,
        window: EventTarget,
        scheduler: FrameScheduler,
        device_factory: DeviceFactory = SoftwareDevice,
        picking: Optional[PickingEngine] = None,
        on_label: Optional[LabelCallback] = None,
    ):
        self.surface = surface
        self.window = window
        self.scene = SceneGraph(device_factory=device_factory)
        self.loop = RenderLoop(scheduler, self._on_frame)
        self.controls: Optional[OrbitControls] = None
        self.interaction = InteractionController(
            surface,
            picking or PickingEngine(),
            self.scene.camera_snapshot,
            on_label=self._emit_label,
        )
        self.on_label = on_label
        self.display_label = ""
        self._mounted = False

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """
        Create render resources and register listeners.

        Raises:
            ResourceInitError: If the drawing surface is unavailable
        """
        if self._mounted:
            return
        self.scene.initialize(self.surface.width, self.surface.height)

        self.controls = OrbitControls(self.scene.camera)
        self.controls.connect(self.surface)
        self.scene.controls = self.controls

        self.interaction.bind(self.window)
        self.window.add_listener(RESIZE, self._on_resize)
        self._mounted = True

    def teardown(self) -> None:
        """Stop the loop, remove listeners, release every resource."""
        if not self._mounted:
            return
        self.loop.stop()
        self.interaction.unbind()
        self.interaction.attach(None, None)
        self.window.remove_listener(RESIZE, self._on_resize)
        if self.controls is not None:
            self.controls.dispose()
            self.controls = None
        self.scene.dispose()
        self._mounted = False
        logger.info("Visualizer torn down")

    def __enter__(self) -> "EmbeddingVisualizer":
        self.mount()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    # -------------------------------------------------------------------------
    # Batches
    # -------------------------------------------------------------------------

    @property
    def model(self) -> Optional[PointCloudModel]:
        cloud = self.scene.point_cloud
        return cloud.model if cloud else None

    def load_batch(self, labels: Sequence[str], vectors: Sequence[Sequence[float]]) -> PointCloudModel:
        """
        Project, normalize and display a batch.

        Raises:
            DimensionMismatchError: Inconsistent vector lengths or label count
            InsufficientDataError: Fewer than two vectors
            DegenerateRangeError: Projection collapses to a single value
        """
        # Everything that can reject the data runs before the scene is touched
        batch = EmbeddingBatch.from_sequences(labels, vectors)
        projector = PCAProjector()
        positions = normalize(projector.fit_transform(batch.vectors))
        model = PointCloudModel(
            labels=batch.labels,
            positions=positions,
            explained_variance_ratio=projector.explained_variance_ratio,
        )

        if not self._mounted:
            self.mount()
        self.scene.load_batch(model)
        self.interaction.attach(model, self.scene.shader)
        self._emit_label(model.display_label())
        self.loop.start()

        logger.info(f"Loaded batch of {len(batch)} vectors ({batch.dimension} dims)")
        return model

    def clear(self) -> None:
        """Stop rendering and drop the current batch."""
        self.loop.stop()
        self.interaction.attach(None, None)
        self.scene.clear_batch()
        self._emit_label("")

    # -------------------------------------------------------------------------
    # Interaction
    # -------------------------------------------------------------------------

    def select(self, index: int) -> None:
        self.interaction.select(index)

    def clear_selection(self) -> None:
        self.interaction.select(NO_INDEX)

    def clear_hover(self) -> None:
        self.interaction.clear_hover()

    def tap(self, x: float, y: float) -> None:
        """
        Click at canvas coordinates for hosts that report no pointer motion.

        Moves the pointer onto the spot and clicks the window. The hover is
        dropped afterwards since no later move arrives to end it.
        """
        self.surface.dispatch(PointerEvent(POINTER_MOVE, x, y))
        self.window.dispatch(PointerEvent(CLICK, x, y))
        self.clear_hover()

    def resize(self, width: int, height: int) -> None:
        self.surface.set_size(width, height)
        self.scene.resize(width, height)

    def _on_resize(self, event: PointerEvent) -> None:
        self.scene.resize(self.surface.width, self.surface.height)

    def _emit_label(self, label: str) -> None:
        self.display_label = label
        if self.on_label is not None:
            self.on_label(label)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _on_frame(self, time_delta: float) -> None:
        self.scene.render_frame(time_delta)

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        return self.scene.last_frame

    def render_once(self) -> np.ndarray:
        """Draw a single frame without advancing time."""
        return self.scene.render_frame(0.0)
