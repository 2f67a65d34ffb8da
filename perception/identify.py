# perception/identify.py
from __future__ import annotations
from typing import List, Optional, Set
from core.interfaces import Cluster, Cell
from core.grid import manhattan

def _touching(cluster: Cluster, cell: Cell) -> bool:
    return any(manhattan(c, cell) <= 1 for c in cluster.cells)

def identify_snake(clusters: List[Cluster], prev_snake_keys: Set[Cell], start_cell: Cell,
                   expected_head: Optional[Cell] = None,
                   prev_head: Optional[Cell] = None) -> Optional[Cluster]:
    """
    Picks the snake's cluster.

    With a previous snake known, the cluster overlapping it most wins; on equal
    overlap the first cluster in list order is kept. When nothing overlaps (a
    one-cell snake that just moved), the cluster holding the predicted head is
    taken, else one touching the previous head. Without any of that, the
    cluster covering the spawn cell is taken, else the largest cluster.
    """
    if not clusters:
        return None
    if prev_snake_keys:
        best, score = None, 0
        for cluster in clusters:
            overlap = sum(1 for c in cluster.cells if c in prev_snake_keys)
            if overlap > score:
                best, score = cluster, overlap
        if best is not None:
            return best
    if expected_head is not None:
        for cluster in clusters:
            if expected_head in cluster.members:
                return cluster
    if prev_head is not None:
        for cluster in clusters:
            if _touching(cluster, prev_head):
                return cluster
    for cluster in clusters:
        if start_cell in cluster.members:
            return cluster
    largest = clusters[0]
    for cluster in clusters[1:]:
        if len(cluster.cells) > len(largest.cells):
            largest = cluster
    return largest
