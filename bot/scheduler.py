# bot/scheduler.py
from __future__ import annotations
from typing import Callable, Optional
import pygame as pg
from core.interfaces import FrameScheduler

FrameCallback = Callable[[], None]

class ClockScheduler(FrameScheduler):
    """
    Stand-in for a host's per-frame callback: `run()` invokes the requested
    callback once per frame, paced by a pygame clock. A callback that does not
    request another frame ends the run. `on_frame` runs before each callback
    (the host game uses it to advance and redraw); returning False ends the run.
    """
    def __init__(
        self,
        fps: int = 60,
        on_frame: Optional[Callable[[], Optional[bool]]] = None,
        max_frames: Optional[int] = None,
    ):
        self.fps = fps
        self.on_frame = on_frame
        self.max_frames = max_frames
        self.frames = 0
        self._pending: Optional[FrameCallback] = None
        self._clock = pg.time.Clock()

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending = callback

    def run(self) -> int:
        while self._pending is not None:
            if self.max_frames is not None and self.frames >= self.max_frames:
                break
            cb, self._pending = self._pending, None
            if self.on_frame is not None and self.on_frame() is False:
                break
            self._clock.tick(self.fps)
            cb()
            self.frames += 1
        return self.frames

class ManualScheduler(FrameScheduler):
    """Frames advance only when `step()` is called."""
    def __init__(self):
        self._pending: Optional[FrameCallback] = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending = callback

    def step(self, n: int = 1) -> int:
        ran = 0
        for _ in range(n):
            if self._pending is None:
                break
            cb, self._pending = self._pending, None
            cb()
            ran += 1
        return ran
