# core/game_host.py
from __future__ import annotations
from typing import Optional, Callable, Protocol
import numpy as np
from config import AppConfig
from .interfaces import Snapshot, Move, MOVES_BY_NAME, DIRS
from .snake_rules import Rules

class FrameRenderer(Protocol):
    def draw(self, s: Snapshot) -> None: ...
    def pixels(self) -> np.ndarray: ...

_MOVES_BY_KEY = {m.key: m for m in DIRS}

class SnakeGameHost:
    """
    Wraps the reference rules and a renderer into the surface the bot observes.
    The game advances on its own clock (one rules step every `frames_per_step`
    frames), independent of the bot's per-frame tick.
    """
    def __init__(
        self,
        cfg: AppConfig,
        renderer: Optional[FrameRenderer] = None,
        rules: Optional[Rules] = None,
        on_game_over: Optional[Callable[[Snapshot], None]] = None,
    ):
        self.cfg = cfg
        self.rules = rules or Rules(cfg)
        self.renderer = renderer
        self.on_game_over = on_game_over
        self.playing = False
        self.start_overlay = True
        self.game_over_overlay = False
        self.frame = 0
        self.games_finished = 0
        self._redraw()

    # ---- GameSurface ----
    def is_ready(self) -> bool:
        return self.renderer is not None

    def read_pixels(self) -> Optional[np.ndarray]:
        if self.renderer is None:
            return None
        return self.renderer.pixels()

    def read_score(self) -> str:
        return str(self.rules.score)

    def is_playing(self) -> bool:
        return self.playing

    def start_overlay_active(self) -> bool:
        return self.start_overlay

    def game_over_overlay_active(self) -> bool:
        return self.game_over_overlay

    def press_start(self) -> None:
        self._begin()

    def press_play_again(self) -> None:
        self._begin()

    # ---- input ----
    def key_down(self, key: str) -> None:
        move = _MOVES_BY_KEY.get(key) or MOVES_BY_NAME.get(key)
        if move is not None and self.playing:
            self.rules.steer(move)

    def steer(self, move: Move) -> None:
        if self.playing:
            self.rules.steer(move)

    # ---- clock ----
    def advance_frame(self) -> Snapshot:
        """One render frame; steps the rules when the game clock is due."""
        if self.playing:
            self.frame += 1
            if self.frame % max(1, self.cfg.frames_per_step) == 0:
                snap = self.rules.step()
                if snap.terminated:
                    self._finish(snap)
            self._redraw()
        return self.rules.snapshot()

    # internals
    def _begin(self) -> None:
        self.rules.reset()
        self.playing = True
        self.start_overlay = False
        self.game_over_overlay = False
        self.frame = 0
        self._redraw()

    def _finish(self, snap: Snapshot) -> None:
        self.playing = False
        self.game_over_overlay = True
        self.games_finished += 1
        if self.on_game_over is not None:
            self.on_game_over(snap)

    def _redraw(self) -> None:
        if self.renderer is not None:
            self.renderer.draw(self.rules.snapshot())
