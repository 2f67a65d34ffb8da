# core/interfaces.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, List, Set, Optional, Union, Protocol, Callable
import numpy as np

Cell = Tuple[int, int]   # (x, y)

# ---- moves ----

@dataclass(frozen=True)
class Move:
    dx: int
    dy: int
    key: str     # input identifier sent to the game
    name: str

UP = Move(0, -1, "ArrowUp", "up")
RIGHT = Move(1, 0, "ArrowRight", "right")
DOWN = Move(0, 1, "ArrowDown", "down")
LEFT = Move(-1, 0, "ArrowLeft", "left")

DIRS: Tuple[Move, ...] = (UP, RIGHT, DOWN, LEFT)
MOVES_BY_NAME = {m.name: m for m in DIRS}

Plan = List[Move]

# ---- perception data ----

@dataclass(frozen=True)
class Metric:
    r: float
    g: float
    b: float
    a: float
    value: float
    bright: bool

@dataclass
class MetricGrid:
    """Per-cell averaged channels, every array shaped (grid, grid) and indexed [y, x]."""
    r: np.ndarray
    g: np.ndarray
    b: np.ndarray
    a: np.ndarray
    value: np.ndarray
    bright: np.ndarray

    def at(self, cell: Cell) -> Metric:
        x, y = cell
        return Metric(
            r=float(self.r[y, x]), g=float(self.g[y, x]), b=float(self.b[y, x]),
            a=float(self.a[y, x]), value=float(self.value[y, x]),
            bright=bool(self.bright[y, x]),
        )

    def value_of(self, cell: Cell) -> float:
        x, y = cell
        return float(self.value[y, x])

    def bright_cells(self) -> List[Cell]:
        ys, xs = np.nonzero(self.bright)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

@dataclass
class Cluster:
    cells: List[Cell]                       # traversal order
    members: Set[Cell] = field(default_factory=set)

    def __post_init__(self):
        if not self.members:
            self.members = set(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self.members

@dataclass(frozen=True)
class SnakeState:
    head: Cell
    tail: Cell
    body: Tuple[Cell, ...]   # head first

@dataclass(frozen=True)
class Observation:
    head: Cell
    tail: Cell
    body: Tuple[Cell, ...]   # head first
    food: Optional[Cell]

    @classmethod
    def from_body(cls, body, food: Optional[Cell]) -> "Observation":
        body = tuple(body)
        return cls(head=body[0], tail=body[-1], body=body, food=food)

class FailureReason(str, Enum):
    NO_FRAME = "no_frame"
    NO_BRIGHT_CELLS = "no_bright_cells"
    NO_CLUSTERS = "no_clusters"
    NO_SNAKE_CLUSTER = "no_snake_cluster"
    WALK_LOOP = "walk_loop"
    SHORT_BODY = "short_body"
    BROKEN_BODY = "broken_body"

@dataclass(frozen=True)
class PerceptionFailure:
    reason: FailureReason

PerceptionResult = Union[Observation, PerceptionFailure]

@dataclass
class PerceptionContext:
    """Cross-tick memory the control loop lends to perception for one tick."""
    prev_snake_keys: Set[Cell] = field(default_factory=set)
    prev_head: Optional[Cell] = None
    expected_head: Optional[Cell] = None
    prev_snake: Optional[List[Cell]] = None

# ---- external collaborators ----

class GameSurface(Protocol):
    """What the bot can see of, and do to, the game it plays."""
    def is_ready(self) -> bool: ...
    def read_pixels(self) -> Optional[np.ndarray]: ...      # (H, W, 4) uint8 RGBA
    def read_score(self) -> str: ...
    def is_playing(self) -> bool: ...
    def start_overlay_active(self) -> bool: ...
    def game_over_overlay_active(self) -> bool: ...
    def press_start(self) -> None: ...
    def press_play_again(self) -> None: ...

class ActionSink(Protocol):
    def emit(self, move: Move) -> None: ...

class FrameScheduler(Protocol):
    def request_frame(self, callback: Callable[[], None]) -> None: ...

# ---- headless game ----

@dataclass(frozen=True)
class Snapshot:
    snake: Tuple[Cell, ...]   # head first
    food: Optional[Cell]
    dir: Tuple[int, int]
    score: int
    step_count: int
    terminated: bool
    reason: str | None
    grid_w: int
    grid_h: int
