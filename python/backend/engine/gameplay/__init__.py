from backend.engine.gameplay.game import GamePlay
from backend.engine.gameplay.transitions import (
    KeyEvent,
    PointerEvent,
    PointerPhase,
    is_complete,
    on_key,
    on_pointer,
    tick,
)

__all__ = [
    "GamePlay",
    "KeyEvent",
    "PointerEvent",
    "PointerPhase",
    "is_complete",
    "on_key",
    "on_pointer",
    "tick",
]
