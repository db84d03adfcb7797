"""Image service and pointer mapping, on in-memory pygame surfaces."""

from __future__ import annotations

import random
from pathlib import Path

import pygame
import pytest

from backend.config import reveal_duration
from backend.errors import AssetLoadError
from backend.models.board import Board
from frontend.gui.pygame.app import BoardLayout, pointer_to_cell
from frontend.imaging import (
    crop_into_grid,
    list_images,
    load_source_image,
    measure_size,
    scale_to_board,
)
from frontend.session import prepare_session

from conftest import image_grid

SHIPPED_IMAGES = Path(__file__).resolve().parents[2] / "assets" / "images"


# -- helpers ------------------------------------------------------------------


def _striped(rows: int, cols: int, cell: int) -> pygame.Surface:
    """A picture whose cell (r, c) is filled with colour (r*10, c*10, 0)."""
    surf = pygame.Surface((cols * cell, rows * cell))
    for r in range(rows):
        for c in range(cols):
            surf.fill((r * 10, c * 10, 0), pygame.Rect(c * cell, r * cell, cell, cell))
    return surf


def _save(tmp_path: Path, name: str, size: tuple[int, int]) -> Path:
    path = tmp_path / name
    pygame.image.save(pygame.Surface(size), str(path))
    return path


# -- measuring ----------------------------------------------------------------


@pytest.mark.parametrize(
    "size, magnitude",
    [
        ((10, 10), 0),
        ((150, 100), 0),
        ((500, 300), 3),
        ((800, 600), 5),
        ((1000, 1000), 6),
        ((1280, 960), 6),
        ((1920, 1080), 7),
        ((4000, 3000), 10),
        ((6000, 4000), 10),
    ],
)
def test_measure_size(size: tuple[int, int], magnitude: int) -> None:
    assert measure_size(pygame.Surface(size, depth=8)) == magnitude


def test_every_measured_size_has_a_reveal_bucket() -> None:
    for side in (1, 50, 300, 900, 2000, 8000):
        reveal_duration(measure_size(pygame.Surface((side, side), depth=8)))


# -- cropping -----------------------------------------------------------------


def test_crop_is_row_major() -> None:
    grid = crop_into_grid(_striped(3, 4, 5), 3, 4, 5, 5)

    assert len(grid) == 3
    assert all(len(row) == 4 for row in grid)
    for r, row in enumerate(grid):
        for c, piece in enumerate(row):
            assert piece.get_size() == (5, 5)
            assert tuple(piece.get_at((2, 2)))[:3] == (r * 10, c * 10, 0)


def test_crop_rejects_small_image() -> None:
    with pytest.raises(AssetLoadError):
        crop_into_grid(pygame.Surface((10, 10)), 3, 4, 5, 5)


def test_scale_to_board() -> None:
    scaled = scale_to_board(pygame.Surface((37, 91)), 80, 60)
    assert scaled.get_size() == (80, 60)


# -- loading ------------------------------------------------------------------


def test_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(AssetLoadError):
        load_source_image(tmp_path / "nope")


def test_empty_directory(tmp_path: Path) -> None:
    (tmp_path / "notes.txt").write_text("not a picture")
    with pytest.raises(AssetLoadError):
        load_source_image(tmp_path)


def test_unreadable_image(tmp_path: Path) -> None:
    (tmp_path / "broken.bmp").write_bytes(b"definitely not a bitmap")
    with pytest.raises(AssetLoadError):
        load_source_image(tmp_path)


def test_asset_errors_are_os_errors(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        load_source_image(tmp_path)


def test_loads_one_of_the_images(tmp_path: Path) -> None:
    _save(tmp_path, "a.bmp", (40, 30))
    _save(tmp_path, "b.bmp", (40, 30))

    assert [p.name for p in list_images(tmp_path)] == ["a.bmp", "b.bmp"]
    assert load_source_image(tmp_path, random.Random(0)).get_size() == (40, 30)


def test_prepare_session(tmp_path: Path) -> None:
    _save(tmp_path, "pic.bmp", (123, 77))

    game, picture = prepare_session(
        tmp_path, rows=2, cols=3, cell_width=10, cell_height=8, rng=random.Random(4)
    )

    assert picture.get_size() == (30, 16)
    assert game.config.reveal_ticks == 84
    assert (game.world.board.rows, game.world.board.cols) == (2, 3)
    assert game.world.original.is_solved()
    assert not game.world.board.is_solved()
    assert game.world.original.get_tile(1, 2).image.get_size() == (10, 8)


def test_prepare_session_converts_pieces(tmp_path: Path) -> None:
    _save(tmp_path, "pic.bmp", (20, 20))

    game, _ = prepare_session(
        tmp_path, rows=2, cols=2, cell_width=4, cell_height=4, convert=lambda s: "x"
    )

    assert all(t.image == "x" for t in game.world.original)


# -- pointer mapping ----------------------------------------------------------

_LAYOUT = BoardLayout(origin_x=20, origin_y=60, cell_width=100, cell_height=50)
_BOARD = Board.from_images(image_grid(6, 8))


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (20, 60, (True, 0, 0)),
        (119, 109, (True, 0, 0)),
        (120, 110, (True, 1, 1)),
        (819, 359, (True, 5, 7)),
        (820, 100, (False, -1, -1)),
        (100, 360, (False, -1, -1)),
        (19, 100, (False, -1, -1)),
        (100, 59, (False, -1, -1)),
    ],
)
def test_pointer_to_cell(x: int, y: int, expected: tuple) -> None:
    assert pointer_to_cell(x, y, _BOARD, _LAYOUT) == expected


def test_pointer_to_cell_inverts_tile_rect() -> None:
    for r in range(_BOARD.rows):
        for c in range(_BOARD.cols):
            rect = _LAYOUT.tile_rect(r, c)
            assert pointer_to_cell(*rect.center, _BOARD, _LAYOUT) == (True, r, c)
            assert pointer_to_cell(*rect.topleft, _BOARD, _LAYOUT) == (True, r, c)


@pytest.mark.parametrize("size, ticks", [((1280, 960), 30), ((1920, 1080), 5)])
def test_prepare_session_accepts_photo_sizes(
    tmp_path: Path, size: tuple[int, int], ticks: int
) -> None:
    _save(tmp_path, "photo.bmp", size)

    game, picture = prepare_session(
        tmp_path, rows=6, cols=8, cell_width=100, cell_height=100
    )

    assert picture.get_size() == (800, 600)
    assert game.config.reveal_ticks == ticks
    assert not game.world.board.is_solved()


def test_shipped_sample_starts_default_session() -> None:
    assert list_images(SHIPPED_IMAGES)

    game, picture = prepare_session(
        SHIPPED_IMAGES, rows=6, cols=8, cell_width=100, cell_height=100,
        rng=random.Random(3),
    )

    assert picture.get_size() == (800, 600)
    assert game.config.reveal_ticks == 84
    assert not game.is_won
