# viz/renderer_pygame.py
from __future__ import annotations
import os
import pygame as pg
import numpy as np
from typing import Optional, Union
from config import AppConfig
from core.interfaces import Snapshot
import viz.renderer_colors as theme

PathLike = Union[str, bytes, os.PathLike]

def _lerp(a, b, t: float):
    return tuple(int(round(x + (y - x) * t)) for x, y in zip(a, b))

class PygameRenderer:
    """Draws snapshots of the reference game. Also serves as the pixel source the bot reads."""
    def __init__(self):
        self.cell = 20
        self.cfg: Optional[AppConfig] = None
        self.surf: Optional[pg.Surface] = None
        self.clock: Optional[pg.time.Clock] = None
        self._auto_flip = True
        self._grid = 0
        self._frame_idx = 0

    def open(self, cfg: AppConfig, headless: bool = False) -> None:
        # Guard: ensure instance, not class
        if isinstance(cfg, type):
            raise TypeError("Pass an AppConfig instance (use AppConfig()), not the class.")
        self.cfg = cfg

        self._grid = cfg.grid
        self.cell = cfg.render_cell
        size = (self._grid * self.cell, self._grid * self.cell)

        pg.init()
        if headless:
            self.surf = pg.Surface(size)
            self._auto_flip = False
        else:
            pg.display.set_caption(cfg.render_title)
            self.surf = pg.display.set_mode(size)
            self._auto_flip = True
        self.clock = pg.time.Clock()
        self._frame_idx = 0

        if cfg.render_record_dir:
            os.makedirs(cfg.render_record_dir, exist_ok=True)

    def draw(self, s: Snapshot) -> None:
        assert self.surf is not None, "Renderer not opened"
        assert self.cfg is not None, "Renderer config not set (call open first)"
        surf = self.surf
        c = self.cell

        surf.fill(theme.BG)

        if self.cfg.render_grid_lines:
            w, h = surf.get_size()
            for i in range(self._grid + 1):
                pg.draw.line(surf, theme.GRID, (i * c, 0), (i * c, h))
                pg.draw.line(surf, theme.GRID, (0, i * c), (w, i * c))

        if s.food is not None:
            fx, fy = s.food
            pg.draw.rect(surf, theme.FOOD, pg.Rect(fx * c + 2, fy * c + 2, c - 4, c - 4), border_radius=c // 3)

        n = len(s.snake)
        for i, (x, y) in enumerate(s.snake):
            if i == 0:
                col = theme.HEAD
            else:
                col = _lerp(theme.BODY, theme.BODY_TAIL, i / max(1, n - 1))
            pg.draw.rect(surf, col, pg.Rect(x * c + 1, y * c + 1, c - 2, c - 2))

        if self.cfg.render_show_hud:
            font = pg.font.SysFont(None, 22)
            txt = font.render(f"Score: {s.score}   Steps: {s.step_count}", True, theme.TEXT)
            surf.blit(txt, (6, 4))

        if self._auto_flip:
            pg.display.flip()

        if self.cfg.render_record_dir:
            self._save_surface_frame()

    def pixels(self) -> np.ndarray:
        """Current surface as an (H, W, 4) uint8 RGBA array."""
        assert self.surf is not None, "Renderer not opened"
        w, h = self.surf.get_size()
        raw = pg.image.tobytes(self.surf, "RGBA")
        return np.frombuffer(raw, dtype=np.uint8).reshape(h, w, 4)

    def tick(self, fps: int) -> None:
        if self.clock:
            self.clock.tick(fps)

    def close(self) -> None:
        try:
            pg.quit()
        finally:
            self.surf = None
            self.clock = None

    # internals
    def _save_surface_frame(self) -> None:
        assert self.surf is not None
        assert self.cfg is not None
        rec_dir: PathLike = self.cfg.render_record_dir
        if not isinstance(rec_dir, (str, bytes, os.PathLike)):
            raise TypeError(f"render_record_dir must be path-like, got {type(rec_dir)}")
        fname = os.path.join(rec_dir, f"frame_{self._frame_idx:06d}.png")
        pg.image.save(self.surf, fname)
        self._frame_idx += 1

