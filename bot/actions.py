# bot/actions.py
from __future__ import annotations
from typing import Callable, List
import pygame as pg
from core.interfaces import ActionSink, Move
from viz.keyboard import MOVE_TO_KEY

class KeyboardSink(ActionSink):
    """Posts a synthetic arrow-key KEYDOWN onto the pygame event queue."""
    def emit(self, move: Move) -> None:
        key = MOVE_TO_KEY[move.name]
        pg.event.post(pg.event.Event(pg.KEYDOWN, key=key, mod=0, unicode="", scancode=0))

class CallbackSink(ActionSink):
    """Forwards each move's key identifier to a callable, e.g. SnakeGameHost.key_down."""
    def __init__(self, fn: Callable[[str], None]):
        self.fn = fn

    def emit(self, move: Move) -> None:
        self.fn(move.key)

class RecordingSink(ActionSink):
    def __init__(self):
        self.moves: List[Move] = []

    def emit(self, move: Move) -> None:
        self.moves.append(move)
