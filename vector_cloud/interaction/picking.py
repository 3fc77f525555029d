"""
Picking: which point, if any, lies under a pointer position.

Hit-testing is done in device space with a pixel tolerance so that it
behaves the same at every zoom level.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from vector_cloud.visualization.camera import CameraSnapshot, ndc_to_pixels, project_to_screen
import config


@dataclass(frozen=True)
class Ray:
    origin: np.ndarray     # (3,)
    direction: np.ndarray  # (3,) unit length


@dataclass(frozen=True)
class PickHit:
    index: int
    pixel_distance: float  # device-space distance from the pointer
    ray_distance: float    # distance from the eye along the ray


class PickingEngine:
    """Stateless picker over (pointer, camera snapshot, positions)."""

    def __init__(self, tolerance_px: float = config.PICK_TOLERANCE_PX):
        self.tolerance_px = tolerance_px

    def ray(self, pointer_ndc: Sequence[float], snapshot: CameraSnapshot) -> Ray:
        """Ray from the camera through the pointer, built by unprojecting it."""
        inverse = np.linalg.inv(snapshot.view_projection)
        x, y = pointer_ndc
        near = inverse @ np.array([x, y, -1.0, 1.0])
        far = inverse @ np.array([x, y, 1.0, 1.0])
        near = near[:3] / near[3]
        far = far[:3] / far[3]

        direction = far - near
        direction /= np.linalg.norm(direction)
        return Ray(origin=snapshot.position.copy(), direction=direction)

    def intersect(
        self,
        pointer_ndc: Sequence[float],
        snapshot: CameraSnapshot,
        positions: np.ndarray,
    ) -> list[PickHit]:
        """
        All points within tolerance of the pointer.

        Returns:
            Hits ordered by pixel distance, then distance along the ray,
            then index
        """
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        if len(positions) == 0:
            return []

        projected = project_to_screen(positions, snapshot)
        pointer_px = ndc_to_pixels(pointer_ndc, snapshot.width, snapshot.height)
        pixel_distance = np.linalg.norm(projected.pixels - pointer_px, axis=1)

        candidates = np.flatnonzero(projected.visible & (pixel_distance <= self.tolerance_px))
        if len(candidates) == 0:
            return []

        ray = self.ray(pointer_ndc, snapshot)
        ray_distance = (positions[candidates] - ray.origin) @ ray.direction

        # Sub-micropixel differences are projection noise and count as ties
        tie_key = np.round(pixel_distance[candidates], 6)
        # lexsort keys are given least significant first
        order = np.lexsort((candidates, ray_distance, tie_key))
        return [
            PickHit(
                index=int(candidates[i]),
                pixel_distance=float(pixel_distance[candidates[i]]),
                ray_distance=float(ray_distance[i]),
            )
            for i in order
        ]

    def pick(
        self,
        pointer_ndc: Sequence[float],
        snapshot: CameraSnapshot,
        positions: np.ndarray,
    ) -> Optional[int]:
        """Index of the closest point under the pointer, or None."""
        hits = self.intersect(pointer_ndc, snapshot, positions)
        return hits[0].index if hits else None
