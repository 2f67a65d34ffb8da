# planning/policy.py
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
from config import AppConfig
from core.interfaces import Cell, Move, DIRS, Observation, Plan
from core.grid import inside
from planning.search import find_path

Heading = Tuple[int, int]

def is_reversal(move: Move, heading: Optional[Heading]) -> bool:
    return heading is not None and move.dx == -heading[0] and move.dy == -heading[1]

def perpendicular_moves(heading: Optional[Heading]) -> Tuple[Move, ...]:
    if heading is None:
        return DIRS
    if heading[0] != 0:
        return tuple(m for m in DIRS if m.dx == 0)
    if heading[1] != 0:
        return tuple(m for m in DIRS if m.dy == 0)
    return DIRS

def wall_ahead(head: Cell, heading: Optional[Heading], grid: int) -> bool:
    if heading is None:
        return False
    return not inside((head[0] + heading[0], head[1] + heading[1]), grid)

def safe_direction(head: Cell, body: Sequence[Cell], heading: Optional[Heading], grid: int,
                   preferred: Iterable[Move] = ()) -> Optional[Move]:
    """
    First single step that keeps the snake alive for one move: `preferred`
    moves are tried before the rest of DIRS, a reversal is refused while the
    snake has a neck, and the tail cell counts as free since it vacates.
    """
    order: List[Move] = []
    for m in list(preferred) + list(DIRS):
        if m is not None and m not in order:
            order.append(m)

    blocking = set(body[:-1])
    for m in order:
        if len(body) > 1 and is_reversal(m, heading):
            continue
        nxt = (head[0] + m.dx, head[1] + m.dy)
        if not inside(nxt, grid):
            continue
        if nxt not in blocking:
            return m
    return None

class SearchPlanner:
    """
    Food first, then chase the tail, then a single safe step.
    `last_source` names the stage that produced the most recent plan.
    """
    def __init__(self, cfg: AppConfig):
        self.grid = cfg.grid
        self.max_nodes = cfg.max_search_nodes
        self.last_source: Optional[str] = None

    def plan(self, obs: Observation, heading: Optional[Heading]) -> Plan:
        body = obs.body
        if obs.food is not None:
            path = find_path(body, obs.food, "food", self.grid, self.max_nodes)
            if path:
                self.last_source = "food"
                return path
        path = find_path(body, obs.tail, "tail", self.grid, self.max_nodes)
        if path:
            self.last_source = "tail"
            return path
        safe = safe_direction(obs.head, body, heading, self.grid, perpendicular_moves(heading))
        self.last_source = "safe" if safe else None
        return [safe] if safe else []

    def emergency_turn(self, obs: Observation, heading: Optional[Heading]) -> Optional[Move]:
        """Turn away from a wall directly ahead, or None when the way ahead is open."""
        if not wall_ahead(obs.head, heading, self.grid):
            return None
        return safe_direction(obs.head, obs.body, heading, self.grid, perpendicular_moves(heading))
