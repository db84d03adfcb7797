"""Image service shared by the frontends: load, measure, scale and crop.

Works on plain ``pygame.Surface`` objects and does not need a display,
except that loaded images are converted to the display format when a
window already exists.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

import pygame

from backend.errors import AssetLoadError

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp")

# Pixel count of magnitude 0; each step up doubles it.
MAGNITUDE_UNIT = 10_000
MAX_MAGNITUDE = 10


def list_images(directory: Path) -> list[Path]:
    """Return the image files in *directory*, sorted by name."""
    if not directory.is_dir():
        raise AssetLoadError(f"Image directory not found: {directory}")
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise AssetLoadError(f"Cannot read image directory {directory}: {exc}") from exc
    return [p for p in entries if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES]


def load_source_image(
    directory: Path, rng: random.Random | None = None
) -> pygame.Surface:
    """Pick one image from *directory* at random and load it."""
    images = list_images(directory)
    if not images:
        raise AssetLoadError(f"No images found in {directory}")

    img_path = (rng or random).choice(images)
    try:
        image = pygame.image.load(str(img_path))
    except (pygame.error, OSError) as exc:
        raise AssetLoadError(f"Cannot load image {img_path}: {exc}") from exc

    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        image = image.convert()
    logger.debug("Loaded %s (%d×%d)", img_path.name, *image.get_size())
    return image


def measure_size(image: pygame.Surface) -> int:
    """Size magnitude of *image*: ``floor(log2(pixels / 10_000))``.

    Images under 20k pixels are magnitude 0.  Anything from about 10 Mpx
    up is clamped to ``MAX_MAGNITUDE`` so large photos land in the last
    bucket instead of falling off the table.
    """
    width, height = image.get_size()
    units = (width * height) // MAGNITUDE_UNIT
    return min(MAX_MAGNITUDE, max(0, units.bit_length() - 1))


def scale_to_board(image: pygame.Surface, width: int, height: int) -> pygame.Surface:
    """Stretch *image* to exactly fill a ``width × height`` board."""
    if image.get_size() == (width, height):
        return image
    if image.get_bitsize() in (24, 32):
        return pygame.transform.smoothscale(image, (width, height))
    return pygame.transform.scale(image, (width, height))


def crop_into_grid(
    image: pygame.Surface,
    rows: int,
    cols: int,
    cell_width: int,
    cell_height: int,
) -> list[list[pygame.Surface]]:
    """Slice *image* into ``rows × cols`` cells, left to right, top to bottom.

    ``grid[r][c]`` is the piece whose home in the picture is ``(r, c)``.
    """
    width, height = image.get_size()
    if width < cols * cell_width or height < rows * cell_height:
        raise AssetLoadError(
            f"Image is {width}×{height}, too small for {rows}×{cols} cells "
            f"of {cell_width}×{cell_height}."
        )
    grid = [
        [
            image.subsurface(
                pygame.Rect(c * cell_width, r * cell_height, cell_width, cell_height)
            ).copy()
            for c in range(cols)
        ]
        for r in range(rows)
    ]
    logger.debug("Cropped image into %d×%d grid", rows, cols)
    return grid


def average_colour(piece: pygame.Surface) -> tuple[int, int, int]:
    """Mean RGB colour of a cropped piece."""
    r, g, b, *_ = pygame.transform.average_color(piece)
    return int(r), int(g), int(b)
