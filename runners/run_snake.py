# runners/run_snake.py
from config import AppConfig
from core.game_host import SnakeGameHost
from viz.renderer_pygame import PygameRenderer
from viz.keyboard import Keyboard

def main(cfg: AppConfig = None):
    """Human play on the same host the bot sees."""
    cfg = cfg or AppConfig()

    rend = PygameRenderer()
    rend.open(cfg)
    host = SnakeGameHost(cfg, rend)
    host.press_start()

    kbd = Keyboard()
    while host.is_playing():
        key = kbd.poll()
        if key == "quit":
            break
        if key is not None:
            host.steer(key)
        host.advance_frame()
        rend.tick(cfg.fps)

    print(f"score: {host.read_score()}  reason: {host.rules.reason}")
    rend.close()
