# viz/keyboard.py
from typing import Optional, Union
import pygame as pg
from core.interfaces import Move, UP, RIGHT, DOWN, LEFT

KEY_TO_MOVE = {
    pg.K_UP: UP,
    pg.K_RIGHT: RIGHT,
    pg.K_DOWN: DOWN,
    pg.K_LEFT: LEFT,
}
MOVE_TO_KEY = {m.name: k for k, m in KEY_TO_MOVE.items()}

class Keyboard:
    """Polls pygame for arrow keys. Returns a Move, "quit", or None."""
    def poll(self) -> Optional[Union[Move, str]]:
        result = None
        for e in pg.event.get():
            if e.type == pg.QUIT:
                return "quit"
            if e.type == pg.KEYDOWN:
                if e.key == pg.K_ESCAPE: return "quit"
                move = KEY_TO_MOVE.get(e.key)
                if move is not None:
                    result = move
        return result
