"""
Frame scheduling and the render loop.

The loop is cooperative: each tick asks the scheduler for the next frame,
the way a browser's animation-frame callback re-requests itself. The host
(a Streamlit fragment, a test) decides when pending frames actually run.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

import config

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler(ABC):
    """Source of frame callbacks."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback for the next frame and return a handle."""
        pass

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending request. Unknown handles are ignored."""
        pass


class ManualScheduler(FrameScheduler):
    """Runs pending callbacks when the host calls run_pending()."""

    def __init__(self):
        self._pending: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """
        Run the callbacks requested before this call.

        Callbacks requested while running wait for the next call.

        Returns:
            Number of callbacks run
        """
        batch = self._pending
        self._pending = {}
        for callback in batch.values():
            callback()
        return len(batch)


class RenderLoop:
    """
    Continuously rescheduled frame callback.

    Each tick advances time by a fixed nominal step rather than measured
    wall-clock time; the animation it drives is cosmetic.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        on_frame: Callable[[float], None],
        time_step: float = config.TIME_STEP,
    ):
        self.scheduler = scheduler
        self.on_frame = on_frame
        self.time_step = time_step
        self.frame_count = 0
        self._running = False
        self._handle: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._handle = self.scheduler.request_frame(self._tick)
        logger.debug("Render loop started")

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None
        logger.debug(f"Render loop stopped after {self.frame_count} frames")

    def _tick(self) -> None:
        if not self._running:
            return
        self._handle = self.scheduler.request_frame(self._tick)
        self.frame_count += 1
        try:
            self.on_frame(self.time_step)
        except Exception:
            # A failing frame would fail again next tick
            self.stop()
            raise
