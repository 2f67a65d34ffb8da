# perception/reconstruct.py
from __future__ import annotations
from typing import List, Optional, Sequence, Union
from core.interfaces import (
    Cluster, Cell, MetricGrid, SnakeState, PerceptionContext, PerceptionFailure, FailureReason,
)
from core.grid import manhattan, same_cell, member_neighbors, is_chain

def refine_cluster(cluster: Cluster, metrics: MetricGrid, expected_len: int,
                   value_threshold: float, extra: int = 6) -> Cluster:
    """
    Drops faint anti-aliasing / fade cells that would make the body look longer
    than the score allows. Never keeps fewer than `expected_len` of the brightest cells.
    """
    if not cluster.cells:
        return cluster
    expected_len = max(1, expected_len)
    ranked = sorted(cluster.cells, key=metrics.value_of, reverse=True)
    max_keep = max(expected_len + extra, min(len(ranked), expected_len * 2))
    kept = ranked[:max_keep]
    cutoff_index = min(expected_len - 1, len(kept) - 1)
    cutoff = max(value_threshold, metrics.value_of(kept[cutoff_index]))
    cells = [c for i, c in enumerate(kept) if metrics.value_of(c) >= cutoff or i < expected_len]
    return Cluster(cells=cells, members=set(cells))

def endpoints_of(cluster: Cluster, grid: int) -> List[Cell]:
    """Cells with at most one neighbour inside the cluster."""
    return [c for c in cluster.cells if len(member_neighbors(c, cluster.members, grid)) <= 1]

def find_head(cluster: Cluster, ctx: PerceptionContext, start_cell: Cell, grid: int) -> Optional[Cell]:
    if not cluster.cells:
        return None
    if ctx.expected_head is not None and ctx.expected_head in cluster.members:
        return ctx.expected_head
    if ctx.prev_head is not None:
        for c in cluster.cells:
            if manhattan(c, ctx.prev_head) == 1 and not same_cell(c, ctx.prev_head):
                return c
    reference = ctx.prev_head if ctx.prev_head is not None else start_cell
    endpoints = endpoints_of(cluster, grid)
    if len(endpoints) == 1:
        return endpoints[0]
    candidates = endpoints if endpoints else cluster.cells
    # stable: ties keep cluster order
    return min(candidates, key=lambda c: manhattan(c, reference))

def walk_body(cluster: Cluster, head: Cell, grid: int, loop_guard_margin: int = 2) -> Optional[List[Cell]]:
    """
    Greedy single-path walk from the head. Returns None when the walk outgrows
    the cluster, which only happens on shapes a single path cannot describe.
    """
    members = cluster.members
    visited = set()
    body: List[Cell] = []
    current: Optional[Cell] = head
    prev: Optional[Cell] = None
    while current is not None:
        body.append(current)
        visited.add(current)
        nxt = None
        for cand in member_neighbors(current, members, grid):
            if prev is not None and cand == prev:
                continue
            if cand not in visited:
                nxt = cand
                break
        prev, current = current, nxt
        if current is None:
            break
        if len(body) > len(members) + loop_guard_margin:
            return None
    return body

def _padding(body: List[Cell], prev_snake: Sequence[Cell], missing: int) -> List[Cell]:
    """Cells of last tick's body that continue past the current tail."""
    present = set(body)
    tail = body[-1]
    prev = list(prev_snake)
    if tail in prev:
        source = prev[prev.index(tail) + 1:]
    else:
        source = prev[-missing:]
    out: List[Cell] = []
    for c in source:
        if len(out) >= missing:
            break
        if c in present:
            continue
        out.append(c)
        present.add(c)
    return out

def reconstruct_snake(cluster: Cluster, expected_len: int, ctx: PerceptionContext,
                      start_cell: Cell, grid: int,
                      loop_guard_margin: int = 2) -> Union[SnakeState, PerceptionFailure]:
    head = find_head(cluster, ctx, start_cell, grid)
    if head is None:
        return PerceptionFailure(FailureReason.NO_SNAKE_CLUSTER)
    body = walk_body(cluster, head, grid, loop_guard_margin)
    if body is None:
        return PerceptionFailure(FailureReason.WALK_LOOP)

    expected_len = max(1, expected_len)
    if len(body) > expected_len:
        del body[expected_len:]
    if len(body) < expected_len and ctx.prev_snake:
        body.extend(_padding(body, ctx.prev_snake, expected_len - len(body)))
    if len(body) < expected_len:
        return PerceptionFailure(FailureReason.SHORT_BODY)
    if not is_chain(body):
        return PerceptionFailure(FailureReason.BROKEN_BODY)
    return SnakeState(head=body[0], tail=body[-1], body=tuple(body))
