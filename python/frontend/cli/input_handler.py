"""Single-keypress input for the terminal frontend.

Raw bytes from a POSIX terminal are turned into ``Action`` values by a
``KeyMap`` that knows the session's hint key.  Arrow keys arrive as
``ESC [ A..D`` escape sequences; a bare Escape quits.
"""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from contextlib import contextmanager
from enum import StrEnum
from typing import Iterator

from backend.errors import ConfigurationError

ESC = "\x1b"


class Action(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SELECT = "select"
    HINT = "hint"
    RESTART = "restart"
    QUIT = "quit"


# Keys the cursor and screen controls own; the hint key may not reuse one.
_FIXED_KEYS: dict[str, Action] = {
    "w": Action.UP,
    "s": Action.DOWN,
    "a": Action.LEFT,
    "d": Action.RIGHT,
    "\r": Action.SELECT,
    "\n": Action.SELECT,
    " ": Action.SELECT,
    "r": Action.RESTART,
    "q": Action.QUIT,
    "\x03": Action.QUIT,  # Ctrl-C
    ESC: Action.QUIT,
}

_ARROWS: dict[str, Action] = {
    f"{ESC}[A": Action.UP,
    f"{ESC}[B": Action.DOWN,
    f"{ESC}[C": Action.RIGHT,
    f"{ESC}[D": Action.LEFT,
}


class KeyMap:
    """Resolves raw key sequences for one session."""

    def __init__(self, hint_key: str) -> None:
        if len(hint_key) != 1 or not hint_key.isprintable():
            raise ConfigurationError(
                f"Terminal hint key must be one printable character, got {hint_key!r}."
            )
        if hint_key.lower() in _FIXED_KEYS:
            raise ConfigurationError(
                f"Hint key {hint_key!r} is already bound to "
                f"{_FIXED_KEYS[hint_key.lower()].value}."
            )
        self.hint_key = hint_key

    def resolve(self, seq: str) -> Action | None:
        """Map one key sequence to its action, or ``None`` if unbound."""
        if seq in _ARROWS:
            return _ARROWS[seq]
        if len(seq) != 1:
            return None
        if seq.lower() == self.hint_key.lower():
            return Action.HINT
        return _FIXED_KEYS.get(seq.lower())


@contextmanager
def raw_terminal() -> Iterator[int]:
    """Put stdin into raw mode for the duration of the block."""
    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_char(fd: int, timeout: float | None) -> str | None:
    ready, _, _ = select.select([fd], [], [], timeout)
    if not ready:
        return None
    return os.read(fd, 1).decode("utf-8", errors="ignore")


def read_sequence(timeout: float | None = None) -> str | None:
    """Read one keypress, including the rest of an escape sequence.

    Returns ``None`` if nothing arrives within *timeout* seconds
    (``None`` blocks).  Reads go through ``os.read`` so ``select`` still
    sees the unread bytes of a multi-byte sequence.
    """
    with raw_terminal() as fd:
        ch = _read_char(fd, timeout)
        if ch != ESC:
            return ch
        seq = ch
        for _ in range(2):
            nxt = _read_char(fd, 0.05)
            if nxt is None:
                break
            seq += nxt
        return seq


def read_action(keymap: KeyMap, timeout: float | None = None) -> Action | None:
    """Block up to *timeout* for a key and resolve it through *keymap*."""
    seq = read_sequence(timeout)
    return None if seq is None else keymap.resolve(seq)
