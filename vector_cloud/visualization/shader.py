"""
Highlight shader for the point cloud.

Per-point color, size and pulse are computed from three uniforms and the
point's draw-order index. Nothing per point is stored on the CPU side; a
selection change is a single uniform write.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from vector_cloud.core.model import NO_INDEX
import config


@dataclass
class Uniform:
    """A named program input, constant across one draw call."""
    value: Any


@dataclass(frozen=True)
class VertexOutput:
    """Varyings produced by the vertex stage for n points."""
    color: np.ndarray       # (n, 3)
    highlight: np.ndarray   # (n,) 0.0 or 1.0
    point_size: np.ndarray  # (n,) pixels


def smoothstep(edge0: float, edge1: float, x: np.ndarray) -> np.ndarray:
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def step(edge: np.ndarray, x: float) -> np.ndarray:
    return (x >= edge).astype(np.float64)


class HighlightShader:
    """
    Two-stage point program.

    Vertex stage: base color from position, highlight flag from an exact
    index match, pulsing point size. Fragment stage: circular sprite with a
    soft edge, highlighted color pulsing toward the highlight color.
    """

    def __init__(
        self,
        base_size: float = config.POINT_BASE_SIZE,
        highlight_size: float = config.POINT_HIGHLIGHT_SIZE,
        pulse_amplitude: float = config.PULSE_AMPLITUDE,
        frequency: float = config.PULSE_FREQUENCY,
        highlight_color: tuple[float, float, float] = config.HIGHLIGHT_COLOR,
    ):
        self.base_size = base_size
        self.highlight_size = highlight_size
        self.pulse_amplitude = pulse_amplitude
        self.frequency = frequency
        self.highlight_color = np.asarray(highlight_color, dtype=np.float64)
        self.uniforms = {
            "time": Uniform(0.0),
            "selected_index": Uniform(float(NO_INDEX)),
            "hovered_index": Uniform(float(NO_INDEX)),
        }

    def reset(self) -> None:
        """Back to time 0 with nothing selected or hovered."""
        self.uniforms["time"].value = 0.0
        self.uniforms["selected_index"].value = float(NO_INDEX)
        self.uniforms["hovered_index"].value = float(NO_INDEX)

    def _oscillation(self) -> float:
        return float(np.sin(self.uniforms["time"].value * self.frequency))

    def vertex(self, positions: np.ndarray, vertex_ids: np.ndarray) -> VertexOutput:
        """
        Run the vertex stage.

        Args:
            positions: (n, 3) normalized positions
            vertex_ids: (n,) draw-order indices
        """
        positions = np.asarray(positions, dtype=np.float64)
        ids = np.asarray(vertex_ids, dtype=np.float64)

        color = 0.5 + positions / 2.0

        selected = self.uniforms["selected_index"].value
        hovered = self.uniforms["hovered_index"].value
        is_selected = step(np.abs(ids - selected), 0.1)
        is_hovered = step(np.abs(ids - hovered), 0.1)
        highlight = np.maximum(is_selected, is_hovered)

        pulse = 1.0 + self.pulse_amplitude * self._oscillation()
        point_size = self.base_size + highlight * self.highlight_size * pulse

        return VertexOutput(color=color, highlight=highlight, point_size=point_size)

    def fragment(
        self,
        point_coord: np.ndarray,
        color: np.ndarray,
        highlight: float,
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Run the fragment stage over one sprite.

        Args:
            point_coord: (h, w, 2) sprite coordinates in [0, 1], origin top-left
            color: (3,) varying color of the point
            highlight: varying highlight flag of the point

        Returns:
            (rgb (3,), alpha (h, w), kept (h, w)) where kept is False for
            discarded fragments
        """
        r = np.linalg.norm(point_coord - 0.5, axis=-1)
        kept = r <= 0.5

        rgb = np.asarray(color, dtype=np.float64)
        if highlight > 0.5:
            t = 0.5 + 0.5 * self._oscillation()
            rgb = rgb * (1.0 - t) + self.highlight_color * t

        alpha = np.where(kept, 1.0 - smoothstep(0.3, 0.5, r), 0.0)
        return rgb, alpha, kept
