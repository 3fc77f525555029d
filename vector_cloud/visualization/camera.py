"""
Perspective camera and the immutable snapshots used for drawing and picking.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

import config


@dataclass(frozen=True)
class CameraSnapshot:
    """Camera matrices and viewport frozen for one tick."""
    view: np.ndarray        # (4, 4) world -> camera
    projection: np.ndarray  # (4, 4) camera -> clip
    position: np.ndarray    # (3,) world-space eye
    near: float
    far: float
    width: int
    height: int

    @property
    def view_projection(self) -> np.ndarray:
        return self.projection @ self.view


@dataclass(frozen=True)
class ScreenProjection:
    """Points mapped into device space by project_to_screen()."""
    pixels: np.ndarray   # (n, 2) x right, y down
    depth: np.ndarray    # (n,) NDC z in [-1, 1]
    visible: np.ndarray  # (n,) inside the near/far range and in front of the eye


def project_to_screen(positions: np.ndarray, snapshot: CameraSnapshot) -> ScreenProjection:
    """Project world positions of shape (n, 3) to pixel coordinates."""
    positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    homogeneous = np.hstack([positions, np.ones((len(positions), 1))])
    clip = homogeneous @ snapshot.view_projection.T

    w = clip[:, 3]
    visible = w > 1e-9
    safe_w = np.where(visible, w, 1.0)
    ndc = clip[:, :3] / safe_w[:, None]
    visible &= (ndc[:, 2] >= -1.0) & (ndc[:, 2] <= 1.0)

    pixels = np.empty((len(positions), 2))
    pixels[:, 0] = (ndc[:, 0] + 1.0) / 2.0 * snapshot.width
    pixels[:, 1] = (1.0 - ndc[:, 1]) / 2.0 * snapshot.height
    return ScreenProjection(pixels=pixels, depth=ndc[:, 2], visible=visible)


def ndc_to_pixels(ndc: Sequence[float], width: int, height: int) -> np.ndarray:
    """Map a normalized device coordinate pair to pixel coordinates."""
    x, y = ndc
    return np.array([(x + 1.0) / 2.0 * width, (1.0 - y) / 2.0 * height])


def look_at_matrix(eye: np.ndarray, target: np.ndarray, up: np.ndarray) -> np.ndarray:
    """Right-handed view matrix looking from eye towards target."""
    forward = target - eye
    forward = forward / np.linalg.norm(forward)
    right = np.cross(forward, up)
    if np.linalg.norm(right) < 1e-9:
        # Looking straight along the up axis; pick any perpendicular
        right = np.cross(forward, np.array([0.0, 0.0, 1.0]))
    right = right / np.linalg.norm(right)
    true_up = np.cross(right, forward)

    view = np.eye(4)
    view[0, :3] = right
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[:3, 3] = -view[:3, :3] @ eye
    return view


def perspective_matrix(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL-style projection with a vertical field of view in degrees."""
    f = 1.0 / np.tan(np.radians(fov_deg) / 2.0)
    proj = np.zeros((4, 4))
    proj[0, 0] = f / aspect
    proj[1, 1] = f
    proj[2, 2] = (far + near) / (near - far)
    proj[2, 3] = 2.0 * far * near / (near - far)
    proj[3, 2] = -1.0
    return proj


class PerspectiveCamera:
    """
    Mutable camera state shared by orbit controls, drawing and picking.

    Readers should take one snapshot() per tick instead of reading the
    live fields twice.
    """

    UP = np.array([0.0, 1.0, 0.0])

    def __init__(
        self,
        fov: float = config.CAMERA_FOV,
        aspect: float = config.VIEWPORT_WIDTH / config.VIEWPORT_HEIGHT,
        near: float = config.CAMERA_NEAR,
        far: float = config.CAMERA_FAR,
    ):
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far
        self.position = np.array(config.CAMERA_POSITION, dtype=np.float64)
        self.target = np.zeros(3)

    def look_at(self, target: Sequence[float]) -> None:
        self.target = np.asarray(target, dtype=np.float64).copy()

    def set_aspect(self, aspect: float) -> None:
        self.aspect = float(aspect)

    @property
    def view_matrix(self) -> np.ndarray:
        return look_at_matrix(self.position, self.target, self.UP)

    @property
    def projection_matrix(self) -> np.ndarray:
        return perspective_matrix(self.fov, self.aspect, self.near, self.far)

    def snapshot(self, width: int, height: int) -> CameraSnapshot:
        return CameraSnapshot(
            view=self.view_matrix,
            projection=self.projection_matrix,
            position=self.position.copy(),
            near=self.near,
            far=self.far,
            width=int(width),
            height=int(height),
        )
