"""Generates shuffled picture boards that are never already solved."""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Sequence

from backend.errors import ConfigurationError
from backend.models.board import Board

logger = logging.getLogger(__name__)

MAX_SHUFFLE_ATTEMPTS = 1000


class GameGenerator:
    """Creates puzzles by uniformly permuting the solved board."""

    @staticmethod
    def solved(grid: Sequence[Sequence[Any]]) -> Board:
        """Return the goal-state board for a row-major grid of sub-images."""
        return Board.from_images(grid)

    @staticmethod
    def shuffle(
        original: Board,
        rng: random.Random | None = None,
        max_attempts: int = MAX_SHUFFLE_ATTEMPTS,
    ) -> Board:
        """Return a uniformly shuffled copy of *original* that is not solved.

        Solved permutations are rejected and redrawn.  Raises
        ``ConfigurationError`` if *max_attempts* draws in a row all come
        out solved, which only happens for a board with a single tile.
        """
        rng = rng or random
        tiles = [replace(t, selected=False) for t in original.flat()]

        for attempt in range(1, max_attempts + 1):
            rng.shuffle(tiles)
            board = Board.from_flat(original.rows, original.cols, tiles)
            if not board.is_solved():
                logger.info(
                    "Shuffled %d×%d board in %d attempt(s)",
                    board.rows,
                    board.cols,
                    attempt,
                )
                return board
            logger.debug("Rejected solved shuffle (attempt %d)", attempt)

        raise ConfigurationError(
            f"Could not shuffle a {original.rows}×{original.cols} board into an "
            f"unsolved arrangement after {max_attempts} attempts."
        )
