# perception/pipeline.py
from __future__ import annotations
import logging
import math
from typing import Optional
from config import AppConfig
from core.interfaces import (
    Observation, PerceptionContext, PerceptionFailure, PerceptionResult, FailureReason,
)
from perception.sampler import as_rgba_image, sample_grid
from perception.clusters import build_clusters
from perception.identify import identify_snake
from perception.reconstruct import refine_cluster, reconstruct_snake
from perception.food import locate_food

logger = logging.getLogger(__name__)

def parse_score(raw: Optional[str]) -> int:
    """Score text as shown by the game; anything unreadable counts as 0."""
    try:
        val = float((raw or "0").strip() or "0")
    except ValueError:
        return 0
    if not math.isfinite(val):
        return 0
    return int(val)

def expected_length(score: int) -> int:
    return max(1, score + 1)

class Perception:
    """Pixels in, grid observation (or a tagged failure) out. Holds no cross-tick state."""
    def __init__(self, cfg: AppConfig):
        if isinstance(cfg, type):
            raise TypeError("Pass an AppConfig instance (use AppConfig()), not the class.")
        self.cfg = cfg

    def observe(self, pixels, score: int, ctx: PerceptionContext,
                width: Optional[int] = None) -> PerceptionResult:
        if pixels is None:
            return self._fail(FailureReason.NO_FRAME)
        image = as_rgba_image(pixels, width or 0)
        h, w = image.shape[:2]
        if not w or not h:
            return self._fail(FailureReason.NO_FRAME)

        cfg = self.cfg
        metrics = sample_grid(image, cfg.grid, cfg.sample_offsets,
                              cfg.value_threshold, cfg.alpha_threshold)
        if not metrics.bright_cells():
            return self._fail(FailureReason.NO_BRIGHT_CELLS)

        clusters = build_clusters(metrics.bright)
        if not clusters:
            return self._fail(FailureReason.NO_CLUSTERS)

        snake_cluster = identify_snake(clusters, ctx.prev_snake_keys, cfg.start_cell,
                                       ctx.expected_head, ctx.prev_head)
        if snake_cluster is None:
            return self._fail(FailureReason.NO_SNAKE_CLUSTER)

        exp_len = expected_length(score)
        refined = refine_cluster(snake_cluster, metrics, exp_len, cfg.value_threshold, cfg.refine_extra)
        snake = reconstruct_snake(refined, exp_len, ctx, cfg.start_cell, cfg.grid, cfg.loop_guard_margin)
        if isinstance(snake, PerceptionFailure):
            return self._fail(snake.reason)

        food = locate_food(clusters, snake_cluster, metrics)
        return Observation(head=snake.head, tail=snake.tail, body=snake.body, food=food)

    def _fail(self, reason: FailureReason) -> PerceptionFailure:
        logger.debug("perception failed: %s", reason.value)
        return PerceptionFailure(reason)
