# perception/sampler.py
from __future__ import annotations
from typing import Sequence, Tuple
import numpy as np
from core.interfaces import Metric, MetricGrid

LUMA = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)

def as_rgba_image(buffer, width: int) -> np.ndarray:
    """
    Accepts an (H, W, 4) array or a flat RGBA buffer of a canvas `width` pixels wide,
    returns an (H, W, 4) array.
    """
    img = np.asarray(buffer)
    if img.ndim == 3:
        if img.shape[2] != 4:
            raise ValueError(f"expected RGBA pixels, got {img.shape[2]} channels")
        return img
    if img.ndim != 1:
        raise ValueError(f"unsupported pixel buffer shape {img.shape}")
    if width <= 0 or img.size % (width * 4) != 0:
        raise ValueError(f"buffer of {img.size} bytes is not a whole number of {width}px RGBA rows")
    return img.reshape(-1, width, 4)

def _pixel_coords(cells: np.ndarray, offset: float, cell_size: float, limit: int) -> np.ndarray:
    # half-up rounding, clamped into the buffer
    px = np.floor((cells + offset) * cell_size + 0.5).astype(np.int64)
    return np.clip(px, 0, limit - 1)

def sample_cell(image: np.ndarray, cell_x: int, cell_y: int, cell_size: float,
                offsets: Sequence[Tuple[float, float]], value_threshold: float,
                alpha_threshold: float) -> Metric:
    """Average of the fixed sub-positions inside one cell."""
    h, w = image.shape[:2]
    acc = np.zeros(4, dtype=np.float64)
    for ox, oy in offsets:
        px = int(_pixel_coords(np.array(cell_x), ox, cell_size, w))
        py = int(_pixel_coords(np.array(cell_y), oy, cell_size, h))
        acc += image[py, px, :4]
    r, g, b, a = acc / len(offsets)
    value = float(LUMA @ np.array([r, g, b]))
    return Metric(r=float(r), g=float(g), b=float(b), a=float(a), value=value,
                  bright=bool(value > value_threshold and a > alpha_threshold))

def sample_grid(image: np.ndarray, grid: int, offsets: Sequence[Tuple[float, float]],
                value_threshold: float, alpha_threshold: float) -> MetricGrid:
    """Vectorised `sample_cell` over the whole grid; the cell size follows the canvas width."""
    h, w = image.shape[:2]
    cell_size = w / grid
    idx = np.arange(grid)
    acc = np.zeros((grid, grid, 4), dtype=np.float64)
    for ox, oy in offsets:
        xs = _pixel_coords(idx, ox, cell_size, w)
        ys = _pixel_coords(idx, oy, cell_size, h)
        acc += image[np.ix_(ys, xs)][..., :4]
    acc /= len(offsets)
    r, g, b, a = acc[..., 0], acc[..., 1], acc[..., 2], acc[..., 3]
    value = acc[..., :3] @ LUMA
    bright = (value > value_threshold) & (a > alpha_threshold)
    return MetricGrid(r=r, g=g, b=b, a=a, value=value, bright=bright)
