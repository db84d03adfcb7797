"""Core gameplay session — applies events and checks the win condition."""

from __future__ import annotations

import logging
import random

from backend.config import SessionConfig
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay.transitions import (
    KeyEvent,
    PointerEvent,
    PointerPhase,
    is_complete,
    on_key,
    on_pointer,
    tick,
)
from backend.engine.gamestate import World
from backend.errors import ConfigurationError
from backend.models.board import Board, Position

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session.

    Owns the current ``World`` and replaces it on every event.  Once the
    board is solved the session is frozen and every further event is
    ignored.
    """

    def __init__(
        self,
        config: SessionConfig,
        original: Board,
        rng: random.Random | None = None,
    ) -> None:
        shuffled = GameGenerator.shuffle(original, rng)
        self._setup(config, original, shuffled)

    @classmethod
    def from_board(
        cls, config: SessionConfig, original: Board, shuffled: Board
    ) -> "GamePlay":
        """Create a session from a known shuffled layout."""
        obj = object.__new__(cls)
        obj._setup(config, original, shuffled)
        return obj

    def _setup(self, config: SessionConfig, original: Board, shuffled: Board) -> None:
        if (original.rows, original.cols) != (config.rows, config.cols):
            raise ConfigurationError(
                f"Board is {original.rows}×{original.cols} but the session "
                f"is configured for {config.rows}×{config.cols}."
            )
        if sorted(shuffled.arrangement()) != sorted(original.arrangement()):
            raise ValueError("Shuffled board does not hold the original's tiles.")
        self.config = config
        self.swaps = 0
        self._world = World.start(original, shuffled, config.reveal_ticks)
        self._won = is_complete(self._world)
        logger.info(
            "Session started: %d×%d grid, %d reveal ticks",
            config.rows,
            config.cols,
            config.reveal_ticks,
        )

    # -- events ---------------------------------------------------------------

    def pointer(self, event: PointerEvent) -> bool:
        """Apply a pointer event.  Returns True if the world changed."""
        if self._won:
            return False
        before = self._world
        after = on_pointer(before, event)
        if before.selection is not None and after.selection is None:
            self.swaps += 1
        return self._commit(after)

    def press(self, cell: Position | None) -> bool:
        """Shorthand for a press-phase pointer event on *cell*."""
        return self.pointer(PointerEvent(PointerPhase.PRESS, cell))

    def key(self, event: KeyEvent | str) -> bool:
        """Apply a key press.  Returns True if the world changed."""
        if self._won:
            return False
        if isinstance(event, str):
            event = KeyEvent(event)
        return self._commit(
            on_key(
                self._world,
                event,
                self.config.hint_key,
                self.config.reveal_ticks,
            )
        )

    def tick(self) -> bool:
        """Advance the clock one tick.  Returns True if the world changed."""
        if self._won:
            return False
        return self._commit(tick(self._world))

    # -- queries --------------------------------------------------------------

    @property
    def world(self) -> World:
        return self._world

    @property
    def is_won(self) -> bool:
        return self._won

    # -- helpers --------------------------------------------------------------

    def _commit(self, world: World) -> bool:
        changed = world is not self._world
        self._world = world
        if is_complete(world):
            self._won = True
            logger.info("Puzzle solved in %d swap(s)", self.swaps)
        return changed
