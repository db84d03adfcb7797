"""Shuffle generator: same tiles, never solved, bounded retries."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.errors import ConfigurationError
from backend.models.board import Board

from conftest import image_grid


class _IdentityRandom(random.Random):
    """Leaves the sequence in order for the first *n* shuffles."""

    def __init__(self, n: int) -> None:
        super().__init__(0)
        self.remaining = n
        self.calls = 0

    def shuffle(self, x) -> None:  # type: ignore[override]
        self.calls += 1
        if self.remaining > 0:
            self.remaining -= 1
            return
        super().shuffle(x)


@pytest.mark.parametrize("seed", range(25))
def test_shuffle_keeps_tiles_and_is_not_solved(seed: int, original_6x8: Board) -> None:
    board = GameGenerator.shuffle(original_6x8, random.Random(seed))

    assert (board.rows, board.cols) == (6, 8)
    assert Counter(board.arrangement()) == Counter(original_6x8.arrangement())
    assert not board.is_solved()
    assert not any(t.selected for t in board)


@pytest.mark.parametrize("seed", range(200))
def test_two_tile_board_always_comes_out_swapped(seed: int) -> None:
    original = Board.from_images(image_grid(1, 2))

    board = GameGenerator.shuffle(original, random.Random(seed))

    assert board.arrangement() == ((0, 1), (0, 0))


def test_shuffle_images_travel_with_tiles(original_2x2: Board) -> None:
    board = GameGenerator.shuffle(original_2x2, random.Random(3))
    for tile in board:
        assert tile.image == f"img{tile.home_row}{tile.home_col}"


def test_solved_draws_are_rejected(original_2x2: Board) -> None:
    rng = _IdentityRandom(3)

    board = GameGenerator.shuffle(original_2x2, rng)

    assert rng.calls >= 4
    assert not board.is_solved()


def test_original_is_untouched(original_2x2: Board) -> None:
    before = original_2x2.arrangement()
    GameGenerator.shuffle(original_2x2, random.Random(1))
    assert original_2x2.arrangement() == before
    assert original_2x2.is_solved()


def test_single_tile_board_gives_up() -> None:
    original = Board.from_images(image_grid(1, 1))
    with pytest.raises(ConfigurationError):
        GameGenerator.shuffle(original, random.Random(0), max_attempts=10)


def test_clears_stale_selection(original_2x2: Board) -> None:
    marked = original_2x2.with_tile(
        0, 0, original_2x2.get_tile(0, 0).with_selected(True)
    )
    board = GameGenerator.shuffle(marked, random.Random(5))
    assert board.selected_positions() == []
