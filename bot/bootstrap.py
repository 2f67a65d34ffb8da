# bot/bootstrap.py
from __future__ import annotations
import logging
import time
from typing import Callable, Optional, TypeVar
from config import AppConfig
from core.interfaces import ActionSink, FrameScheduler, GameSurface
from bot.control import SnakeBot, BotHooks

logger = logging.getLogger(__name__)

T = TypeVar("T")

def wait_for(
    predicate: Callable[[], Optional[T]],
    timeout: float = 5.0,
    interval: float = 0.05,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[T]:
    """Polls `predicate` until it returns something truthy or `timeout` seconds pass."""
    start = clock()
    while clock() - start < timeout:
        value = predicate()
        if value:
            return value
        sleep(interval)
    return None

class BotRegistry:
    """Holds the one bot a bootstrap call may start."""
    def __init__(self):
        self.instance: Optional[SnakeBot] = None

def bootstrap(
    cfg: AppConfig,
    find_surface: Callable[[], Optional[GameSurface]],
    sink: ActionSink,
    scheduler: FrameScheduler,
    registry: BotRegistry,
    hooks: Optional[BotHooks] = None,
    **wait_kwargs,
) -> Optional[SnakeBot]:
    """
    Waits for the game surface, then builds and starts a bot. A registry that
    already holds a bot gets that bot back instead of a second one.
    """
    if registry.instance is not None:
        logger.warning("snake bot instance already running")
        return registry.instance

    def _ready() -> Optional[GameSurface]:
        surface = find_surface()
        if surface is not None and surface.is_ready():
            return surface
        return None

    timeout = wait_kwargs.pop("timeout", cfg.start_timeout)
    interval = wait_kwargs.pop("interval", cfg.poll_interval)
    surface = wait_for(_ready, timeout=timeout, interval=interval, **wait_kwargs)
    if surface is None:
        logger.error("game surface not found within %.2fs", timeout)
        return None

    bot = SnakeBot(cfg, surface, sink, scheduler, hooks=hooks)
    registry.instance = bot
    bot.start()
    return bot
