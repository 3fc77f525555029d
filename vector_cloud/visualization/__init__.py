"""
Rendering for Vector-Cloud: camera, controls, shader, device, scene, loop.
"""

from .camera import CameraSnapshot, PerspectiveCamera
from .controls import OrbitControls
from .device import RenderDevice, SoftwareDevice
from .events import EventTarget, PointerEvent, Surface
from .loop import FrameScheduler, ManualScheduler, RenderLoop
from .scene import SceneGraph
from .shader import HighlightShader, Uniform

__all__ = [
    "CameraSnapshot",
    "PerspectiveCamera",
    "OrbitControls",
    "RenderDevice",
    "SoftwareDevice",
    "EventTarget",
    "PointerEvent",
    "Surface",
    "FrameScheduler",
    "ManualScheduler",
    "RenderLoop",
    "SceneGraph",
    "HighlightShader",
    "Uniform",
]
