#!/usr/bin/env python3
"""Picture Swap Puzzle.

Usage::

    python main.py                      # Pygame GUI, 6×8 grid
    python main.py -f rich              # Rich terminal
    python main.py --rows 3 --cols 4    # smaller grid
    python main.py --images ~/Pictures --seed 7 -v
"""

import importlib
import logging
import random
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
ASSETS_DIR = PROJECT_ROOT / "assets"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import (  # noqa: E402
    DEFAULT_CELL_PX,
    DEFAULT_COLS,
    DEFAULT_HINT_KEY,
    DEFAULT_ROWS,
)
from backend.errors import PuzzleError  # noqa: E402

logger = logging.getLogger("picture_swap")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    pygame = "pygame"
    rich = "rich"


_RUNNERS = {
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Frontend = typer.Option(
        Frontend.pygame, "-f", "--frontend",
        help="Frontend to launch.",
    ),
    images: Path = typer.Option(
        ASSETS_DIR / "images", "-i", "--images",
        help=(
            "Directory of .png, .jpg, .jpeg or .bmp pictures to play with. "
            "A sample picture ships in assets/images."
        ),
    ),
    rows: int = typer.Option(
        DEFAULT_ROWS, "-r", "--rows",
        min=1, max=20,
        help="Grid rows.",
    ),
    cols: int = typer.Option(
        DEFAULT_COLS, "-c", "--cols",
        min=1, max=20,
        help="Grid columns.",
    ),
    cell_px: int = typer.Option(
        DEFAULT_CELL_PX, "--cell",
        min=8, max=400,
        help="Tile size in pixels (pygame only).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for picture choice and shuffle.",
    ),
    labels: bool = typer.Option(
        False, "--labels",
        help="Show each tile's home cell (rich only).",
    ),
    hint_key: str = typer.Option(
        DEFAULT_HINT_KEY, "--hint-key",
        help="Key that briefly shows the whole picture.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log every selection, swap and tick-driven change.",
    ),
) -> None:
    """Picture Swap Puzzle."""
    _configure_logging(verbose)
    rng = random.Random(seed) if seed is not None else None

    mod = importlib.import_module(_RUNNERS[frontend])
    try:
        mod.run(
            images_dir=images.expanduser(),
            rows=rows,
            cols=cols,
            cell_px=cell_px,
            rng=rng,
            labels=labels,
            hint_key=hint_key,
        )
    except PuzzleError as exc:
        logger.error("Cannot start puzzle: %s", exc)
        Console(stderr=True).print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
