# tests/conftest.py
import os
import sys

# Headless SDL so tests don't open a window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# Ensure project root is importable (so core.* / perception.* imports work from repo root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pygame as pg
import pytest

@pytest.fixture(scope="session", autouse=True)
def _pygame_session():
    pg.init()
    yield
    pg.quit()

@pytest.fixture
def cfg():
    from config import AppConfig
    return AppConfig(seed=7, render_cell=10)

def paint(cells, grid=28, cell=10, bg=(0, 0, 0), alpha=255, inset=1):
    """RGBA frame with each {(x, y): (r, g, b)} cell filled, leaving an `inset` border."""
    img = np.zeros((grid * cell, grid * cell, 4), dtype=np.uint8)
    img[..., :3] = bg
    img[..., 3] = alpha
    for (x, y), rgb in cells.items():
        img[y * cell + inset:(y + 1) * cell - inset, x * cell + inset:(x + 1) * cell - inset, :3] = rgb
    return img

@pytest.fixture
def paint_frame():
    return paint

@pytest.fixture
def bright_mask():
    def make(cells, grid=28):
        mask = np.zeros((grid, grid), dtype=bool)
        for x, y in cells:
            mask[y, x] = True
        return mask
    return make

class NumpyRenderer:
    """Draws snapshots with the game theme straight into an array, no pygame surface."""
    def __init__(self, cfg):
        self.cfg = cfg
        self.frame = None
        self.blank = False

    def draw(self, s):
        import viz.renderer_colors as theme
        cells = {}
        if s.food is not None:
            cells[s.food] = theme.FOOD
        n = len(s.snake)
        for i, c in enumerate(s.snake):
            if i == 0:
                cells[c] = theme.HEAD
            else:
                t = i / max(1, n - 1)
                cells[c] = tuple(int(round(a + (b - a) * t)) for a, b in zip(theme.BODY, theme.BODY_TAIL))
        self.frame = paint(cells, grid=self.cfg.grid, cell=self.cfg.render_cell, bg=theme.BG)

    def pixels(self):
        if self.blank:
            return np.zeros_like(self.frame)
        return self.frame

@pytest.fixture
def numpy_host(cfg):
    from core.game_host import SnakeGameHost
    def make(**overrides):
        c = cfg.with_(**overrides) if overrides else cfg
        return SnakeGameHost(c, NumpyRenderer(c))
    return make
