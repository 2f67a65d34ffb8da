# runners/run_bot.py
from __future__ import annotations
import logging
from typing import Optional

from config import AppConfig
from core.game_host import SnakeGameHost
from viz.renderer_pygame import PygameRenderer
from viz.keyboard import Keyboard
from bot.actions import KeyboardSink, CallbackSink
from bot.bootstrap import bootstrap, BotRegistry
from bot.control import BotHooks, SnakeBot
from bot.scheduler import ClockScheduler
from telemetry.loggers import CSVLogger, make_game_logger, GAME_KEYS
from telemetry.metrics import ScoreBoard


def run(cfg: AppConfig, headless: bool = False) -> Optional[SnakeBot]:
    renderer = PygameRenderer()
    renderer.open(cfg, headless=headless)
    host = SnakeGameHost(cfg, renderer)

    # --- Logger (one CSV row per finished game) ---
    logger = CSVLogger(cfg.log_path, fieldnames=GAME_KEYS)
    board = ScoreBoard()
    registry = BotRegistry()
    frames = {"n": 0}
    hooks = BotHooks(on_game_end=make_game_logger(
        logger=logger, board=board, step_getter=lambda: frames["n"],
    ))

    kbd = Keyboard()

    def on_frame() -> bool:
        bot = registry.instance
        if bot is not None:
            frames["n"] += 1
            if bot.games_finished >= cfg.games:
                return False
        if not headless:
            key = kbd.poll()
            if key == "quit":
                return False
            if key is not None:
                host.steer(key)
        host.advance_frame()
        return True

    sink = CallbackSink(host.key_down) if headless else KeyboardSink()
    scheduler = ClockScheduler(
        fps=0 if headless else cfg.fps,
        on_frame=on_frame,
        max_frames=cfg.games * cfg.max_ticks,
    )

    print("=== Snake bot ===")
    print(f"grid: {cfg.grid}x{cfg.grid}  games: {cfg.games}  headless: {headless}")

    bot = bootstrap(cfg, lambda: host, sink, scheduler, registry, hooks=hooks)
    try:
        if bot is not None:
            scheduler.run()
    finally:
        logger.close()
        renderer.close()

    if bot is not None:
        print(f"games: {board.games}  best: {board.best}  last error: {bot.last_error!r}")
    return bot


def main(cfg: Optional[AppConfig] = None, headless: bool = False):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return run(cfg or AppConfig(), headless=headless)


if __name__ == "__main__":
    main()
