# perception/clusters.py
from __future__ import annotations
from typing import List
import numpy as np
from core.interfaces import Cluster, Cell
from core.grid import NEIGHBOR_OFFSETS

def _flood(bright: np.ndarray, seed: Cell, visited: set) -> Cluster:
    grid_h, grid_w = bright.shape
    stack = [seed]
    cells: List[Cell] = []
    visited.add(seed)
    while stack:
        cx, cy = stack.pop()
        cells.append((cx, cy))
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = cx + dx, cy + dy
            if nx < 0 or ny < 0 or nx >= grid_w or ny >= grid_h:
                continue
            if not bright[ny, nx]:
                continue
            if (nx, ny) in visited:
                continue
            visited.add((nx, ny))
            stack.append((nx, ny))
    return Cluster(cells=cells, members=set(cells))

def build_clusters(bright: np.ndarray) -> List[Cluster]:
    """
    Groups bright cells into 4-connected clusters with an explicit stack.
    Seeds are taken in row-major order, so the cluster list order is stable
    for a given brightness mask; cell order inside a cluster is traversal order.
    """
    visited: set = set()
    clusters: List[Cluster] = []
    grid_h, grid_w = bright.shape
    for y in range(grid_h):
        for x in range(grid_w):
            if not bright[y, x] or (x, y) in visited:
                continue
            clusters.append(_flood(bright, (x, y), visited))
    return clusters
