# planning/search.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Literal
from core.interfaces import Cell, Move, DIRS
from core.grid import inside

Mode = Literal["food", "tail"]
MAX_NODES = 20_000

@dataclass(frozen=True, slots=True)
class SearchState:
    head: Cell
    body: Tuple[Cell, ...]   # head first
    parent: int              # index into the state list, -1 for the root
    move: Optional[Move]

def body_key(body: Sequence[Cell]) -> Tuple[Cell, ...]:
    """Canonical key of a whole snake: the ordered body itself."""
    return tuple(body)

def advance(body: Tuple[Cell, ...], move: Move, grid: int, target: Optional[Cell] = None,
            mode: Mode = "tail") -> Optional[Tuple[Cell, ...]]:
    """
    Body after one move, or None when the move leaves the grid or bites the body.
    The last segment vacates unless the snake eats this move.

    Stepping back onto the neck (body[1]) is never a move, even for a
    two-cell snake whose neck is the vacating tail: the game ignores that
    reversal and the dispatcher refuses it, so the plain vacating-tail rule
    would plan a step that never happens.
    """
    hx, hy = body[0]
    new_head = (hx + move.dx, hy + move.dy)
    if not inside(new_head, grid):
        return None
    if len(body) > 1 and new_head == body[1]:
        return None
    grows = mode == "food" and new_head == target
    blocking = body if grows else body[:-1]
    if new_head in blocking:
        return None
    if grows:
        return (new_head,) + body
    return (new_head,) + body[:-1]

def reconstruct_path(states: List[SearchState], index: int) -> List[Move]:
    path: List[Move] = []
    cursor = index
    while cursor != -1:
        st = states[cursor]
        if st.move is not None:
            path.append(st.move)
        cursor = st.parent
    path.reverse()
    return path

def find_path(body: Sequence[Cell], target: Optional[Cell], mode: Mode, grid: int,
              max_nodes: int = MAX_NODES) -> Optional[List[Move]]:
    """
    Breadth-first search over whole-snake configurations.

    Nodes are full bodies, not head cells, because whether a move bites the
    snake depends on where every segment is at that point. Bodies are
    deduplicated by their ordered cells. At most `max_nodes` states are
    stored and expanded; hitting the cap without reaching `target` is a failure.

    In "food" mode the start state already on the target counts; in "tail"
    mode at least one move is required.
    """
    if target is None or not body:
        return None
    start = tuple((int(x), int(y)) for x, y in body)
    states: List[SearchState] = [SearchState(head=start[0], body=start, parent=-1, move=None)]
    visited = {body_key(start)}

    cursor = 0
    while cursor < len(states) and cursor < max_nodes:
        st = states[cursor]
        if st.head == target and (mode == "food" or st.parent != -1):
            return reconstruct_path(states, cursor)

        for move in DIRS:
            new_body = advance(st.body, move, grid, target, mode)
            if new_body is None:
                continue
            key = body_key(new_body)
            if key in visited:
                continue
            visited.add(key)
            if len(states) < max_nodes:
                states.append(SearchState(head=new_body[0], body=new_body, parent=cursor, move=move))

        cursor += 1

    return None
