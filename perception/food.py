# perception/food.py
from __future__ import annotations
from typing import List, Optional
from core.interfaces import Cluster, Cell, MetricGrid

BRIGHTNESS_EPS = 1e-3

def cluster_brightness(cluster: Optional[Cluster], metrics: MetricGrid) -> float:
    if cluster is None or not cluster.cells:
        return 0.0
    return sum(metrics.value_of(c) for c in cluster.cells) / len(cluster.cells)

def pick_food_cell(cluster: Optional[Cluster], metrics: MetricGrid) -> Optional[Cell]:
    if cluster is None or not cluster.cells:
        return None
    best, best_value = None, None
    for c in cluster.cells:
        v = metrics.value_of(c)
        if best is None or v > best_value:
            best, best_value = c, v
    return best

def locate_food(clusters: List[Cluster], snake_cluster: Optional[Cluster], metrics: MetricGrid) -> Optional[Cell]:
    """
    Brightest remaining cluster by mean value; near-equal means go to the
    smaller cluster. Returns that cluster's brightest cell.
    """
    best: Optional[Cluster] = None
    best_score = 0.0
    for cluster in clusters:
        if cluster is snake_cluster:
            continue
        score = cluster_brightness(cluster, metrics)
        if best is None:
            best, best_score = cluster, score
            continue
        if abs(score - best_score) > BRIGHTNESS_EPS:
            if score > best_score:
                best, best_score = cluster, score
        elif len(cluster.cells) < len(best.cells):
            best, best_score = cluster, score
    return pick_food_cell(best, metrics)
