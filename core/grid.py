# core/grid.py
from __future__ import annotations
from typing import Iterable, Iterator, List, Optional, Sequence
from .interfaces import Cell

# neighbour probe order used by flood fill and the body walk
NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))

def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0]-b[0]) + abs(a[1]-b[1])

def same_cell(a: Optional[Cell], b: Optional[Cell]) -> bool:
    return a is not None and b is not None and a[0] == b[0] and a[1] == b[1]

def inside(cell: Cell, grid: int) -> bool:
    return 0 <= cell[0] < grid and 0 <= cell[1] < grid

def neighbors4(cell: Cell, grid: int) -> Iterator[Cell]:
    x, y = cell
    for dx, dy in NEIGHBOR_OFFSETS:
        n = (x + dx, y + dy)
        if inside(n, grid):
            yield n

def member_neighbors(cell: Cell, members, grid: int) -> List[Cell]:
    return [n for n in neighbors4(cell, grid) if n in members]

def is_chain(body: Sequence[Cell]) -> bool:
    """True when every cell is unique and consecutive cells touch edge to edge."""
    if len(set(body)) != len(body):
        return False
    return all(manhattan(a, b) == 1 for a, b in zip(body, body[1:]))

def keys_of(cells: Iterable[Cell]) -> set:
    return {(int(x), int(y)) for x, y in cells}
