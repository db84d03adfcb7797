"""Shared board builders.  Tile images are plain strings here."""

from __future__ import annotations

from typing import Sequence

import pytest

from backend.config import SessionConfig
from backend.models.board import Board, Tile


def image_grid(rows: int, cols: int) -> list[list[str]]:
    return [[f"img{r}{c}" for c in range(cols)] for r in range(rows)]


def board_from_homes(
    rows: int, cols: int, homes: Sequence[tuple[int, int]]
) -> Board:
    """Build a board whose row-major tiles have the given home cells."""
    return Board.from_flat(
        rows, cols, [Tile(r, c, f"img{r}{c}") for r, c in homes]
    )


def make_config(rows: int, cols: int, reveal_ticks: int = 0) -> SessionConfig:
    return SessionConfig(reveal_ticks=reveal_ticks, rows=rows, cols=cols)


@pytest.fixture
def original_2x2() -> Board:
    return Board.from_images(image_grid(2, 2))


@pytest.fixture
def original_6x8() -> Board:
    return Board.from_images(image_grid(6, 8))
