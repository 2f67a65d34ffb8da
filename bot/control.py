# bot/control.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple
from config import AppConfig
from core.interfaces import (
    ActionSink, Cell, FrameScheduler, GameSurface, Move, Observation, PerceptionContext,
    PerceptionFailure, Plan,
)
from core.grid import same_cell, keys_of
from perception.pipeline import Perception, parse_score
from planning.policy import SearchPlanner, is_reversal

logger = logging.getLogger(__name__)

@dataclass
class BotHooks:
    on_game_end: Optional[Callable[[int, Dict[str, Any]], None]] = None

@dataclass
class TickStats:
    ticks: int = 0
    perception_failures: int = 0
    extrapolations: int = 0
    desyncs: int = 0
    dispatched: int = 0
    refused_reversals: int = 0
    emergency_turns: int = 0
    plans: Dict[str, int] = field(default_factory=lambda: {"food": 0, "tail": 0, "safe": 0, "none": 0})

    def as_dict(self) -> Dict[str, Any]:
        out = {k: v for k, v in self.__dict__.items() if k != "plans"}
        out.update({f"plans_{k}": v for k, v in self.plans.items()})
        return out

class SnakeBot:
    """
    Plays through a GameSurface: one tick per frame callback. Perceives the
    board (or extrapolates when perception fails), reconciles the last
    dispatched move against what the board shows, plans when the queue runs
    dry and dispatches at most one move per tick.

    Every piece of cross-tick state lives on this instance and is mutated only
    by `tick()`. An exception inside a tick stops the loop.
    """
    def __init__(
        self,
        cfg: AppConfig,
        surface: GameSurface,
        sink: ActionSink,
        scheduler: FrameScheduler,
        hooks: Optional[BotHooks] = None,
    ):
        if isinstance(cfg, type):
            raise TypeError("Pass an AppConfig instance (use AppConfig()), not the class.")
        self.cfg = cfg
        self.surface = surface
        self.sink = sink
        self.scheduler = scheduler
        self.hooks = hooks or BotHooks()
        self.perception = Perception(cfg)
        self.planner = SearchPlanner(cfg)
        self.grid = cfg.grid

        self.running = False
        self.games_finished = 0
        self.last_error: Optional[BaseException] = None
        self._reset_state()

    # ---- lifecycle ----
    def start(self) -> None:
        if self.running:
            return
        self.running = True
        logger.info("snake bot starting")
        self.scheduler.request_frame(self._frame)

    def stop(self) -> None:
        self.running = False

    def _frame(self) -> None:
        if not self.running:
            return
        try:
            self.tick()
        except Exception as err:
            self.last_error = err
            logger.exception("snake bot stopped due to error")
            self.stop()
            return
        self.scheduler.request_frame(self._frame)

    # ---- state ----
    def _reset_state(self) -> None:
        self.prev_snake_keys: set = set()
        self.prev_head: Optional[Cell] = None
        self.expected_head: Optional[Cell] = None
        self.command_pending = False
        self.plan: Plan = []
        self.prev_snake: Optional[List[Cell]] = None
        self.prev_food: Optional[Cell] = None
        self.last_score = self.read_score()
        self.current_dir: Optional[Tuple[int, int]] = (1, 0)
        self.last_body_length = 1
        self.stats = TickStats()

    def read_score(self) -> int:
        return parse_score(self.surface.read_score())

    def context(self) -> PerceptionContext:
        return PerceptionContext(
            prev_snake_keys=self.prev_snake_keys,
            prev_head=self.prev_head,
            expected_head=self.expected_head,
            prev_snake=self.prev_snake,
        )

    def ensure_game_running(self) -> None:
        if self.surface.start_overlay_active():
            self.surface.press_start()
            self._reset_state()
        if self.surface.game_over_overlay_active():
            self._report_game_end()
            self.surface.press_play_again()
            self._reset_state()

    def _report_game_end(self) -> None:
        summary = {"final_score": self.read_score(), **self.stats.as_dict()}
        logger.info("game %d over: score=%s ticks=%d", self.games_finished, summary["final_score"], self.stats.ticks)
        if self.hooks.on_game_end is not None:
            self.hooks.on_game_end(self.games_finished, summary)
        self.games_finished += 1

    # ---- tick ----
    def tick(self) -> None:
        self.ensure_game_running()
        if not self.surface.is_playing():
            return
        self.stats.ticks += 1

        score = self.read_score()
        grew = score > self.last_score
        if grew:
            self.prev_food = None
        self.last_score = score

        state = self._perceive(score, grew)
        if state is None:
            return

        self.last_body_length = len(state.body)
        self._update_current_dir(state)

        if not self.plan:
            turn = self.planner.emergency_turn(state, self.current_dir)
            if turn is not None:
                self.plan = [turn]
                self.command_pending = False
                self.stats.emergency_turns += 1

        self._reconcile(state)
        self.prev_snake_keys = keys_of(state.body)

        if not self.plan:
            self.plan = self.planner.plan(state, self.current_dir)
            self.stats.plans[self.planner.last_source or "none"] += 1
        if not self.plan:
            return

        if not self.command_pending:
            move = self.plan.pop(0)
            if self.send_direction(move):
                self.command_pending = True
                self.expected_head = (state.head[0] + move.dx, state.head[1] + move.dy)

    def _perceive(self, score: int, grew: bool) -> Optional[Observation]:
        result = self.perception.observe(self.surface.read_pixels(), score, self.context())
        if isinstance(result, Observation):
            self.prev_snake = list(result.body)
            if result.food is not None:
                self.prev_food = result.food
            return result

        assert isinstance(result, PerceptionFailure)
        self.stats.perception_failures += 1
        if not self.prev_snake:
            return None
        if self.expected_head is not None:
            self._extrapolate(grew)
        return Observation.from_body(self.prev_snake, self.prev_food)

    def _extrapolate(self, grew: bool) -> None:
        """Advance the last known body onto the predicted head."""
        simulated = [self.expected_head] + list(self.prev_snake)
        if not grew and len(simulated) > 1:
            simulated.pop()
        self.prev_snake = simulated
        self.prev_snake_keys = keys_of(simulated)
        self.prev_head = simulated[0]
        self.command_pending = False
        self.expected_head = None
        self.stats.extrapolations += 1

    def _reconcile(self, state: Observation) -> None:
        if self.expected_head is not None and same_cell(state.head, self.expected_head):
            self.command_pending = False
            self.prev_head = state.head
            self.expected_head = None
        elif self.prev_head is None or not same_cell(state.head, self.prev_head):
            if self.expected_head is not None:
                self.stats.desyncs += 1
            self.prev_head = state.head
            self.command_pending = False
            self.plan = []
            self.expected_head = None

    def _update_current_dir(self, state: Observation) -> None:
        if len(state.body) >= 2:
            (hx, hy), (nx, ny) = state.body[0], state.body[1]
            self.current_dir = (hx - nx, hy - ny)
        elif self.expected_head is not None:
            hx, hy = state.body[0]
            self.current_dir = (self.expected_head[0] - hx, self.expected_head[1] - hy)

    def send_direction(self, move: Move) -> bool:
        if self.last_body_length > 1 and is_reversal(move, self.current_dir):
            self.stats.refused_reversals += 1
            return False
        self.sink.emit(move)
        self.stats.dispatched += 1
        return True
