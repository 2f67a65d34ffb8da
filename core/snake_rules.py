# core/snake_rules.py  (pure rules, no pygame)
from __future__ import annotations
from typing import Tuple, Optional
import random
from .interfaces import Snapshot, Move, Cell
from config import AppConfig

class Rules:
    """Reference snake game the bot is exercised against. Spawns a one-cell snake on the centre cell."""
    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self.rng = random.Random(cfg.seed)
        self._reset_state()

    def _reset_state(self):
        self.snake = [self.cfg.start_cell]
        self.dir = (1, 0)
        self._next_dir = self.dir
        self.food = self._place_food()
        self.score = 0
        self.step_count = 0
        self.terminated = False
        self.reason = None

    def reset(self) -> Snapshot:
        self._reset_state()
        return self.snapshot()

    def _place_food(self) -> Optional[Cell]:
        occ = set(self.snake)
        g = self.cfg.grid
        free = [(x, y) for x in range(g) for y in range(g) if (x, y) not in occ]
        if not free:
            return None
        return self.rng.choice(free)

    def steer(self, move: Move) -> None:
        ndx, ndy = move.dx, move.dy
        cdx, cdy = self.dir
        # Prevent instant 180° reversal if the snake has a body
        if len(self.snake) > 1 and (ndx == -cdx and ndy == -cdy):
            return
        self._next_dir = (ndx, ndy)

    def step(self) -> Snapshot:
        if self.terminated:
            return self.snapshot()
        self.dir = self._next_dir

        hx, hy = self.snake[0]
        dx, dy = self.dir
        new_head = (hx+dx, hy+dy)
        self.step_count += 1

        # collisions
        if not (0 <= new_head[0] < self.cfg.grid and 0 <= new_head[1] < self.cfg.grid):
            self.terminated, self.reason = True, "wall"
            return self.snapshot()
        grows = new_head == self.food
        blocking = self.snake if grows else self.snake[:-1]
        if new_head in blocking:
            self.terminated, self.reason = True, "self"
            return self.snapshot()

        self.snake.insert(0, new_head)
        if grows:
            self.score += 1
            self.food = self._place_food()
            if self.food is None:
                self.terminated, self.reason = True, "board_full"
        else:
            self.snake.pop()
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            snake=tuple(self.snake),
            food=self.food,
            dir=self.dir,
            score=self.score,
            step_count=self.step_count,
            terminated=self.terminated,
            reason=self.reason,
            grid_w=self.cfg.grid,
            grid_h=self.cfg.grid,
        )
