"""Builds a ready-to-play session from an image directory."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any, Callable

import pygame

from backend.config import SessionConfig
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from frontend.imaging import (
    crop_into_grid,
    load_source_image,
    measure_size,
    scale_to_board,
)

logger = logging.getLogger(__name__)


def prepare_session(
    images_dir: Path,
    *,
    rows: int,
    cols: int,
    cell_width: int,
    cell_height: int,
    rng: random.Random | None = None,
    convert: Callable[[pygame.Surface], Any] | None = None,
    **overrides: Any,
) -> tuple[GamePlay, pygame.Surface]:
    """Load a picture, cut it up and start a shuffled session.

    *convert*, if given, turns each cropped piece into the handle the
    frontend wants to store on its tiles.  Returns the session and the
    picture scaled to the board.
    """
    image = load_source_image(images_dir, rng)
    magnitude = measure_size(image)
    config = SessionConfig.for_magnitude(
        magnitude,
        rows=rows,
        cols=cols,
        cell_width=cell_width,
        cell_height=cell_height,
        **overrides,
    )
    logger.debug("Image magnitude %d -> %d reveal ticks", magnitude, config.reveal_ticks)

    picture = scale_to_board(image, *config.board_size)
    grid: list[list[Any]] = crop_into_grid(
        picture, config.rows, config.cols, config.cell_width, config.cell_height
    )
    if convert is not None:
        grid = [[convert(piece) for piece in row] for row in grid]

    original = GameGenerator.solved(grid)
    return GamePlay(config, original, rng), picture
