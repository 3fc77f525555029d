"""
Scene graph: camera, lights, axis gizmo with labels, and the point cloud.
Owns every render resource and draws one frame per call.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from vector_cloud.core.model import PointCloudModel
from vector_cloud.errors import ResourceInitError
from vector_cloud.visualization.camera import CameraSnapshot, PerspectiveCamera
from vector_cloud.visualization.controls import OrbitControls
from vector_cloud.visualization.device import (
    RenderDevice,
    ShaderProgram,
    SoftwareDevice,
    Texture,
    VertexBuffer,
)
from vector_cloud.visualization.shader import HighlightShader
import config

logger = logging.getLogger(__name__)

DeviceFactory = Callable[[int, int], RenderDevice]


@dataclass
class Light:
    """Scene light. The highlight shader is unlit; lights are kept for other materials."""
    kind: str
    color: tuple[int, int, int]
    intensity: float
    position: Optional[tuple[float, float, float]] = None


@dataclass
class AxisLabel:
    text: str
    position: np.ndarray
    texture: Texture


@dataclass
class PointCloud:
    """Renderable for one batch: geometry buffer plus its program."""
    buffer: VertexBuffer
    program: ShaderProgram
    model: PointCloudModel

    def release(self) -> None:
        self.buffer.release()
        self.program.release()


class SceneGraph:
    """
    Persistent rendering state for the visualizer.

    Lifecycle: initialize() once, load_batch() per batch, render_frame()
    per tick, dispose() at teardown.
    """

    AXIS_COLORS = np.array([
        [1.0, 0.0, 0.0],  # x
        [0.0, 1.0, 0.0],  # y
        [0.0, 0.0, 1.0],  # z
    ])

    def __init__(
        self,
        device_factory: DeviceFactory = SoftwareDevice,
        shader_factory: Callable[[], HighlightShader] = HighlightShader,
    ):
        self.device_factory = device_factory
        self.shader_factory = shader_factory

        self.device: Optional[RenderDevice] = None
        self.camera: Optional[PerspectiveCamera] = None
        self.controls: Optional[OrbitControls] = None
        self.lights: list[Light] = []
        self.axis_labels: list[AxisLabel] = []
        self.point_cloud: Optional[PointCloud] = None

        self.last_frame: Optional[np.ndarray] = None
        self.last_snapshot: Optional[CameraSnapshot] = None
        self.width = config.VIEWPORT_WIDTH
        self.height = config.VIEWPORT_HEIGHT

    @property
    def is_initialized(self) -> bool:
        return self.device is not None

    @property
    def shader(self) -> Optional[HighlightShader]:
        return self.point_cloud.program.shader if self.point_cloud else None

    def initialize(self, width: int, height: int) -> None:
        """
        Create device, camera, lights and axis helpers.

        Raises:
            ResourceInitError: If the drawing surface cannot be created
        """
        if self.is_initialized:
            return

        device = self.device_factory(width, height)
        try:
            labels = []
            offset = config.AXIS_LABEL_OFFSET
            for text, position in (
                ("X", (offset, 0.0, 0.0)),
                ("Y", (0.0, offset, 0.0)),
                ("Z", (0.0, 0.0, offset)),
            ):
                texture = device.create_text_texture(text, config.AXIS_LABEL_FONT_SIZE, label=f"axis-{text}")
                labels.append(AxisLabel(text, np.array(position), texture))
        except Exception as e:
            device.dispose()
            raise ResourceInitError(f"Failed to create scene resources: {e}") from e

        self.device = device
        self.width, self.height = int(width), int(height)
        self.axis_labels = labels

        self.camera = PerspectiveCamera(aspect=width / height)
        self.camera.look_at((0.0, 0.0, 0.0))

        self.lights = [
            Light("ambient", (255, 255, 255), config.LIGHT_INTENSITY),
            Light("directional", (255, 255, 255), config.LIGHT_INTENSITY, position=(1.0, 1.0, 1.0)),
        ]
        logger.info(f"Scene initialized ({width}x{height})")

    def _require_initialized(self) -> RenderDevice:
        if self.device is None:
            raise ResourceInitError("Scene is not initialized")
        return self.device

    def load_batch(self, model: PointCloudModel) -> None:
        """
        Replace the point cloud with the given model's geometry.

        New resources are built first; the previous cloud is released only
        once they exist, so a failure leaves the old cloud in place.
        """
        device = self._require_initialized()

        buffer = device.create_buffer(model.positions, label="positions")
        try:
            shader = self.shader_factory()
            program = device.create_program(shader, label="highlight")
        except BaseException:
            buffer.release()
            raise

        shader.reset()
        model.highlight.reset()

        previous = self.point_cloud
        self.point_cloud = PointCloud(buffer=buffer, program=program, model=model)
        if previous is not None:
            previous.release()

        logger.info(f"Loaded {len(model)} points into the scene")

    def clear_batch(self) -> None:
        """Drop the point cloud and release its resources."""
        if self.point_cloud is not None:
            self.point_cloud.release()
            self.point_cloud = None
            self.last_snapshot = None

    def resize(self, width: int, height: int) -> None:
        device = self._require_initialized()
        device.resize(width, height)
        self.width, self.height = int(width), int(height)
        self.camera.set_aspect(width / height)

    def camera_snapshot(self) -> CameraSnapshot:
        """Snapshot used for the last drawn frame, or the live camera before any draw."""
        if self.last_snapshot is not None:
            return self.last_snapshot
        self._require_initialized()
        return self.camera.snapshot(self.width, self.height)

    def _sync_uniforms(self) -> None:
        cloud = self.point_cloud
        uniforms = cloud.program.shader.uniforms
        uniforms["selected_index"].value = float(cloud.model.highlight.selected)
        uniforms["hovered_index"].value = float(cloud.model.highlight.hovered)

    def render_frame(self, time_delta: float) -> np.ndarray:
        """
        Advance damping and time, then draw one frame.

        Returns:
            RGB frame of shape (height, width, 3), uint8
        """
        device = self._require_initialized()

        if self.controls is not None:
            self.controls.update()

        if self.point_cloud is not None:
            self.point_cloud.program.shader.uniforms["time"].value += time_delta
            self._sync_uniforms()

        snapshot = self.camera.snapshot(self.width, self.height)

        device.begin_frame(config.BACKGROUND_COLOR)
        size = config.AXES_SIZE
        segments = np.array([
            [[0.0, 0.0, 0.0], [size, 0.0, 0.0]],
            [[0.0, 0.0, 0.0], [0.0, size, 0.0]],
            [[0.0, 0.0, 0.0], [0.0, 0.0, size]],
        ])
        device.draw_lines(segments, self.AXIS_COLORS, snapshot)
        for label in self.axis_labels:
            device.draw_sprite(label.texture, label.position, snapshot)
        if self.point_cloud is not None:
            device.draw_points(self.point_cloud.program, self.point_cloud.buffer, snapshot)
        frame = device.end_frame()

        self.last_snapshot = snapshot
        self.last_frame = frame
        return frame

    def dispose(self) -> None:
        """Release every render resource. Safe to call twice."""
        if self.device is None:
            return
        self.clear_batch()
        for label in self.axis_labels:
            label.texture.release()
        self.axis_labels = []
        self.device.dispose()
        self.device = None
        self.controls = None
        self.last_snapshot = None
        logger.info("Scene disposed")
