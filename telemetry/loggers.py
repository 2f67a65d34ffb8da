from __future__ import annotations
import csv, os
from typing import Dict, Any, Protocol, Callable
from telemetry.metrics import ScoreBoard

GAME_KEYS = [
    "step",
    "game",
    "game/score", "game/score_ema", "game/score_mean100", "game/score_max100", "game/score_best",
    "game/ticks", "game/dispatched",
    "perc/failures", "perc/extrapolations", "perc/desyncs",
    "plan/food", "plan/tail", "plan/safe", "plan/none", "plan/emergency_turns",
    "plan/refused_reversals",
]

class Logger(Protocol):
    def log(self, step: int, scalars: Dict[str, Any]) -> None: ...
    def flush(self) -> None: ...
    def close(self) -> None: ...


class CSVLogger:
    """Append-only CSV logger with header auto-discovery or predefined schema."""
    def __init__(self, path: str, fieldnames: list[str] | None = None):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.path = path
        self._fieldnames = fieldnames
        self._file = open(path, "a", newline="")
        self._writer = None

    def log(self, step: int, scalars: Dict[str, Any]) -> None:
        scalars = {"step": step, **scalars}
        if self._writer is None:
            if self._fieldnames is None:
                self._fieldnames = list(scalars.keys())
            self._writer = csv.DictWriter(
                self._file,
                fieldnames=self._fieldnames,
                extrasaction="ignore",   # unseen keys are dropped
            )
            if self._file.tell() == 0:
                self._writer.writeheader()
        self._writer.writerow(scalars)

    def flush(self) -> None:
        self._file.flush()

    def close(self) -> None:
        self._file.close()

def make_game_logger(
    *,
    logger: Logger,
    board: ScoreBoard,
    step_getter: Callable[[], int],
) -> Callable[[int, Dict[str, Any]], None]:
    """
    Returns a function(game: int, s: Dict[str, Any]) -> None for BotHooks.on_game_end
    that folds the final score into `board` and logs the game's tick counters.

    'step_getter' should return a running tick count for the CSV 'step' column.
    """
    def _on_game_end(game: int, s: Dict[str, Any]) -> None:
        score = int(s.get("final_score", 0))
        summary = board.add(score)

        scalars = {
            "game": game,
            "game/score": score,
            "game/score_ema": summary["ema"],
            "game/score_mean100": summary["mean"],
            "game/score_max100": summary["max"],
            "game/score_best": summary["best"],
            "game/ticks": s.get("ticks", 0),
            "game/dispatched": s.get("dispatched", 0),
            "perc/failures": s.get("perception_failures", 0),
            "perc/extrapolations": s.get("extrapolations", 0),
            "perc/desyncs": s.get("desyncs", 0),
            "plan/food": s.get("plans_food", 0),
            "plan/tail": s.get("plans_tail", 0),
            "plan/safe": s.get("plans_safe", 0),
            "plan/none": s.get("plans_none", 0),
            "plan/emergency_turns": s.get("emergency_turns", 0),
            "plan/refused_reversals": s.get("refused_reversals", 0),
        }
        logger.log(int(step_getter()), scalars)
        logger.flush()

    return _on_game_end
