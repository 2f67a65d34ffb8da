# config.py
from dataclasses import dataclass, replace
from typing import Optional, Tuple

@dataclass(frozen=True, slots=True)
class AppConfig:
    # shared / global
    grid: int = 28
    seed: Optional[int] = None

    # perception
    value_threshold: float = 32.0
    alpha_threshold: float = 20.0
    sample_offsets: Tuple[Tuple[float, float], ...] = (
        (0.35, 0.35), (0.65, 0.35), (0.35, 0.65), (0.65, 0.65),
    )
    refine_extra: int = 6                # cells kept beyond expected length
    loop_guard_margin: int = 2           # walk aborts past cluster size + margin

    # planning
    max_search_nodes: int = 20_000

    # bootstrap
    start_timeout: float = 5.0           # seconds
    poll_interval: float = 0.05          # seconds

    # host game / render
    fps: int = 60
    frames_per_step: int = 4             # render frames per game step
    render_cell: int = 20
    render_title: str = "Snake Bot"
    render_grid_lines: bool = True
    render_show_hud: bool = False
    render_record_dir: Optional[str] = None

    # runner
    games: int = 5
    max_ticks: int = 20_000              # per game, headless
    log_path: str = "runs/snake_bot/games.csv"

    @property
    def start_cell(self) -> Tuple[int, int]:
        return (self.grid // 2, self.grid // 2)

    def with_(self, **kwargs) -> "AppConfig":
        """Convenience: clone with updated values"""
        return replace(self, **kwargs)
