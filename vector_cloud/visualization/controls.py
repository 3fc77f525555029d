"""
Orbit controls: drag to rotate the camera around a target, wheel to zoom.
"""

import logging
import math
from typing import Optional

import numpy as np

from vector_cloud.visualization.camera import PerspectiveCamera
from vector_cloud.visualization.events import (
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    WHEEL,
    PointerEvent,
    Surface,
)
import config

logger = logging.getLogger(__name__)

_EPS = 1e-6


class OrbitControls:
    """
    Spherical orbit around a target point.

    Input handlers only accumulate a pending rotation and zoom; update()
    applies them to the camera once per frame. With damping enabled the
    pending rotation decays over several frames instead of stopping dead.
    """

    def __init__(
        self,
        camera: PerspectiveCamera,
        enable_damping: bool = config.ORBIT_ENABLE_DAMPING,
        damping_factor: float = config.ORBIT_DAMPING_FACTOR,
        rotate_speed: float = config.ORBIT_ROTATE_SPEED,
        zoom_speed: float = config.ORBIT_ZOOM_SPEED,
        min_distance: float = config.ORBIT_MIN_DISTANCE,
        max_distance: float = config.ORBIT_MAX_DISTANCE,
    ):
        self.camera = camera
        self.target = camera.target.copy()
        self.enable_damping = enable_damping
        self.damping_factor = damping_factor
        self.rotate_speed = rotate_speed
        self.zoom_speed = zoom_speed
        self.min_distance = min_distance
        self.max_distance = max_distance

        self._delta_theta = 0.0
        self._delta_phi = 0.0
        self._scale = 1.0
        self._drag_start: Optional[tuple[float, float]] = None
        self._surface: Optional[Surface] = None

    # -------------------------------------------------------------------------
    # Event wiring
    # -------------------------------------------------------------------------

    def connect(self, surface: Surface) -> None:
        """Start listening to pointer and wheel events on the surface."""
        self._surface = surface
        surface.add_listener(POINTER_DOWN, self._on_pointer_down)
        surface.add_listener(POINTER_MOVE, self._on_pointer_move)
        surface.add_listener(POINTER_UP, self._on_pointer_up)
        surface.add_listener(WHEEL, self._on_wheel)

    def dispose(self) -> None:
        """Remove every listener registered by connect()."""
        if self._surface is None:
            return
        self._surface.remove_listener(POINTER_DOWN, self._on_pointer_down)
        self._surface.remove_listener(POINTER_MOVE, self._on_pointer_move)
        self._surface.remove_listener(POINTER_UP, self._on_pointer_up)
        self._surface.remove_listener(WHEEL, self._on_wheel)
        self._surface = None
        self._drag_start = None

    def _on_pointer_down(self, event: PointerEvent) -> None:
        if event.button == 0:
            self._drag_start = (event.client_x, event.client_y)

    def _on_pointer_move(self, event: PointerEvent) -> None:
        if self._drag_start is None or self._surface is None:
            return
        dx = event.client_x - self._drag_start[0]
        dy = event.client_y - self._drag_start[1]
        self._drag_start = (event.client_x, event.client_y)

        height = self._surface.height
        self.rotate_left(2 * math.pi * dx / height * self.rotate_speed)
        self.rotate_up(2 * math.pi * dy / height * self.rotate_speed)

    def _on_pointer_up(self, event: PointerEvent) -> None:
        self._drag_start = None

    def _on_wheel(self, event: PointerEvent) -> None:
        if event.delta_y < 0:
            self.dolly_in(self.zoom_scale)
        elif event.delta_y > 0:
            self.dolly_out(self.zoom_scale)

    # -------------------------------------------------------------------------
    # Pending motion
    # -------------------------------------------------------------------------

    @property
    def zoom_scale(self) -> float:
        return 0.95 ** self.zoom_speed

    def rotate_left(self, angle: float) -> None:
        self._delta_theta -= angle

    def rotate_up(self, angle: float) -> None:
        self._delta_phi -= angle

    def dolly_in(self, scale: float) -> None:
        self._scale *= scale

    def dolly_out(self, scale: float) -> None:
        self._scale /= scale

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.camera.position - self.target))

    def reset(self) -> None:
        """Return the camera to its start position and drop pending motion."""
        self.camera.position = np.array(config.CAMERA_POSITION, dtype=np.float64)
        self.target = np.zeros(3)
        self.camera.look_at(self.target)
        self._delta_theta = 0.0
        self._delta_phi = 0.0
        self._scale = 1.0

    def update(self) -> bool:
        """
        Apply pending rotation and zoom to the camera.

        Returns:
            True if the camera moved
        """
        offset = self.camera.position - self.target
        radius = float(np.linalg.norm(offset))
        theta = math.atan2(offset[0], offset[2])
        phi = math.acos(min(max(offset[1] / radius, -1.0), 1.0)) if radius > 0 else 0.0

        if self.enable_damping:
            theta += self._delta_theta * self.damping_factor
            phi += self._delta_phi * self.damping_factor
        else:
            theta += self._delta_theta
            phi += self._delta_phi

        phi = min(max(phi, _EPS), math.pi - _EPS)
        radius = min(max(radius * self._scale, self.min_distance), self.max_distance)

        sin_phi_radius = math.sin(phi) * radius
        new_offset = np.array([
            sin_phi_radius * math.sin(theta),
            math.cos(phi) * radius,
            sin_phi_radius * math.cos(theta),
        ])

        previous = self.camera.position.copy()
        self.camera.position = self.target + new_offset
        self.camera.look_at(self.target)

        if self.enable_damping:
            self._delta_theta *= 1 - self.damping_factor
            self._delta_phi *= 1 - self.damping_factor
        else:
            self._delta_theta = 0.0
            self._delta_phi = 0.0
        self._scale = 1.0

        return bool(np.linalg.norm(self.camera.position - previous) > _EPS)
