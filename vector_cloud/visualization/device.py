"""
Render device: owns GPU-style resources and rasterizes draw calls.

SoftwareDevice does the rasterization with numpy into an RGB frame so the
visualizer runs headless (tests, Streamlit). Every resource it hands out
must be released explicitly; live_resources makes leaks visible.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from vector_cloud.errors import ContextLostError, ResourceInitError
from vector_cloud.visualization.camera import CameraSnapshot, project_to_screen
from vector_cloud.visualization.shader import HighlightShader
import config

logger = logging.getLogger(__name__)


class GPUResource:
    """Handle to a device allocation."""

    kind = "resource"

    def __init__(self, device: "RenderDevice", label: str = ""):
        self.device = device
        self.label = label
        self.released = False

    def release(self) -> None:
        if not self.released:
            self.released = True
            self.device._forget(self)

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"<{type(self).__name__} {self.label!r} {state}>"


class VertexBuffer(GPUResource):
    kind = "buffer"

    def __init__(self, device: "RenderDevice", data: np.ndarray, label: str = ""):
        super().__init__(device, label)
        self.data = np.array(data, dtype=np.float32)
        self.data.setflags(write=False)

    @property
    def count(self) -> int:
        return len(self.data)


class ShaderProgram(GPUResource):
    kind = "program"

    def __init__(self, device: "RenderDevice", shader: HighlightShader, label: str = ""):
        super().__init__(device, label)
        self.shader = shader


class Texture(GPUResource):
    kind = "texture"

    def __init__(self, device: "RenderDevice", image: np.ndarray, label: str = ""):
        super().__init__(device, label)
        self.image = image  # (h, w, 4) float in [0, 1]


class RenderDevice(ABC):
    """
    Interface the scene graph draws through.

    A frame is begin_frame(), any number of draw_* calls, then end_frame().
    """

    def __init__(self):
        self._resources: list[GPUResource] = []

    def _track(self, resource: GPUResource) -> GPUResource:
        self._resources.append(resource)
        return resource

    def _forget(self, resource: GPUResource) -> None:
        if resource in self._resources:
            self._resources.remove(resource)

    @property
    def live_resources(self) -> list[GPUResource]:
        return list(self._resources)

    def dispose(self) -> None:
        """Release every resource still alive."""
        for resource in list(self._resources):
            resource.release()

    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        pass

    @abstractmethod
    def create_buffer(self, data: np.ndarray, label: str = "") -> VertexBuffer:
        pass

    @abstractmethod
    def create_program(self, shader: HighlightShader, label: str = "") -> ShaderProgram:
        pass

    @abstractmethod
    def create_text_texture(self, text: str, font_size: int, label: str = "") -> Texture:
        pass

    @abstractmethod
    def begin_frame(self, background: tuple[int, int, int]) -> None:
        pass

    @abstractmethod
    def draw_lines(
        self,
        segments: np.ndarray,
        colors: np.ndarray,
        snapshot: CameraSnapshot,
    ) -> None:
        pass

    @abstractmethod
    def draw_sprite(self, texture: Texture, position: np.ndarray, snapshot: CameraSnapshot) -> None:
        pass

    @abstractmethod
    def draw_points(
        self,
        program: ShaderProgram,
        buffer: VertexBuffer,
        snapshot: CameraSnapshot,
    ) -> None:
        pass

    @abstractmethod
    def end_frame(self) -> np.ndarray:
        pass


class SoftwareDevice(RenderDevice):
    """
    numpy rasterizer.

    Points are blended back to front as soft-edged sprites; lines are
    sampled densely and plotted; text textures come from Pillow.
    """

    LINE_SAMPLES = 400

    def __init__(self, width: int, height: int):
        super().__init__()
        self._lost = False
        self.frames_drawn = 0
        self.draw_calls = 0
        self._color: Optional[np.ndarray] = None
        self.resize(width, height)

    def _check(self) -> None:
        if self._lost:
            raise ContextLostError("Render device context was lost")

    def lose_context(self) -> None:
        """Simulate losing the drawing context."""
        logger.warning("Render device context lost")
        self._lost = True

    @property
    def is_lost(self) -> bool:
        return self._lost

    def resize(self, width: int, height: int) -> None:
        self._check()
        if width <= 0 or height <= 0:
            raise ResourceInitError(f"Cannot create a {width}x{height} drawing surface")
        self.width = int(width)
        self.height = int(height)

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def create_buffer(self, data: np.ndarray, label: str = "") -> VertexBuffer:
        self._check()
        return self._track(VertexBuffer(self, data, label))

    def create_program(self, shader: HighlightShader, label: str = "") -> ShaderProgram:
        self._check()
        return self._track(ShaderProgram(self, shader, label))

    def create_text_texture(self, text: str, font_size: int, label: str = "") -> Texture:
        self._check()
        font = ImageFont.load_default(size=font_size)
        probe = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
        left, top, right, bottom = probe.textbbox((0, 0), text, font=font)

        canvas = Image.new("RGBA", (max(right - left, 1), max(bottom - top, 1)), (0, 0, 0, 0))
        ImageDraw.Draw(canvas).text((-left, -top), text, font=font, fill=(0, 0, 0, 255))
        image = np.asarray(canvas, dtype=np.float64) / 255.0
        return self._track(Texture(self, image, label or text))

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def begin_frame(self, background: tuple[int, int, int]) -> None:
        self._check()
        self._color = np.empty((self.height, self.width, 3))
        self._color[:] = np.asarray(background, dtype=np.float64) / 255.0

    def _require_frame(self) -> np.ndarray:
        if self._color is None:
            raise RuntimeError("begin_frame() must be called before drawing")
        return self._color

    def _require_live(self, *resources: GPUResource) -> None:
        for resource in resources:
            if resource.released:
                raise RuntimeError(f"Drawing with released resource {resource!r}")

    def draw_lines(
        self,
        segments: np.ndarray,
        colors: np.ndarray,
        snapshot: CameraSnapshot,
    ) -> None:
        self._check()
        frame = self._require_frame()
        self.draw_calls += 1

        t = np.linspace(0.0, 1.0, self.LINE_SAMPLES)[:, None]
        for (start, end), color in zip(np.asarray(segments), np.asarray(colors)):
            samples = start + (end - start) * t
            projected = project_to_screen(samples, snapshot)
            pixels = np.floor(projected.pixels[projected.visible]).astype(int)
            inside = (
                (pixels[:, 0] >= 0) & (pixels[:, 0] < self.width)
                & (pixels[:, 1] >= 0) & (pixels[:, 1] < self.height)
            )
            pixels = pixels[inside]
            frame[pixels[:, 1], pixels[:, 0]] = color

    def draw_sprite(self, texture: Texture, position: np.ndarray, snapshot: CameraSnapshot) -> None:
        self._check()
        self._require_live(texture)
        frame = self._require_frame()
        self.draw_calls += 1

        projected = project_to_screen(np.asarray(position).reshape(1, 3), snapshot)
        if not projected.visible[0]:
            return

        h, w = texture.image.shape[:2]
        cx, cy = projected.pixels[0]
        x0 = int(round(cx - w / 2))
        y0 = int(round(cy - h / 2))
        self._blend(frame, texture.image[..., :3], texture.image[..., 3], x0, y0)

    def draw_points(
        self,
        program: ShaderProgram,
        buffer: VertexBuffer,
        snapshot: CameraSnapshot,
    ) -> None:
        self._check()
        self._require_live(program, buffer)
        frame = self._require_frame()
        self.draw_calls += 1

        shader = program.shader
        positions = buffer.data
        varyings = shader.vertex(positions, np.arange(buffer.count))
        projected = project_to_screen(positions, snapshot)

        # Farthest first so nearer sprites blend over them
        order = np.argsort(-projected.depth, kind="stable")
        for i in order:
            if not projected.visible[i]:
                continue
            size = float(varyings.point_size[i])
            cx, cy = projected.pixels[i]
            left = cx - size / 2
            top = cy - size / 2

            xs = np.arange(math.floor(left), math.ceil(left + size)) + 0.5
            ys = np.arange(math.floor(top), math.ceil(top + size)) + 0.5
            u, v = np.meshgrid((xs - left) / size, (ys - top) / size)
            coord = np.stack([u, v], axis=-1)

            rgb, alpha, _ = shader.fragment(coord, varyings.color[i], float(varyings.highlight[i]))
            rgb_image = np.broadcast_to(rgb, alpha.shape + (3,))
            self._blend(frame, rgb_image, alpha, int(math.floor(left)), int(math.floor(top)))

    def _blend(self, frame: np.ndarray, rgb: np.ndarray, alpha: np.ndarray, x0: int, y0: int) -> None:
        h, w = alpha.shape
        fx0, fy0 = max(x0, 0), max(y0, 0)
        fx1, fy1 = min(x0 + w, self.width), min(y0 + h, self.height)
        if fx0 >= fx1 or fy0 >= fy1:
            return

        sx0, sy0 = fx0 - x0, fy0 - y0
        sx1, sy1 = sx0 + (fx1 - fx0), sy0 + (fy1 - fy0)
        a = alpha[sy0:sy1, sx0:sx1, None]
        region = frame[fy0:fy1, fx0:fx1]
        region[:] = rgb[sy0:sy1, sx0:sx1] * a + region * (1.0 - a)

    def end_frame(self) -> np.ndarray:
        self._check()
        frame = self._require_frame()
        self.frames_drawn += 1
        return (np.clip(frame, 0.0, 1.0) * 255).round().astype(np.uint8)
