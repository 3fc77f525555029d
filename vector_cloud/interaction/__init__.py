"""
Pointer interaction: picking and hover/selection handling.
"""

from .picking import PickHit, PickingEngine, Ray
from .controller import InteractionController

__all__ = ["PickHit", "PickingEngine", "Ray", "InteractionController"]
