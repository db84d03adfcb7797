"""Pure state transitions: pointer and key handling, clock ticks, win check.

Each function takes a ``World`` and returns the next one; an event that
does not apply returns the same object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import StrEnum

from backend.engine.gamestate import World
from backend.models.board import Position

logger = logging.getLogger(__name__)


class PointerPhase(StrEnum):
    PRESS = "press"
    RELEASE = "release"
    DRAG = "drag"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event already mapped to a board cell (``None`` = off board)."""

    phase: PointerPhase
    cell: Position | None = None


@dataclass(frozen=True)
class KeyEvent:
    key: str


# -- interaction --------------------------------------------------------------


def on_pointer(world: World, event: PointerEvent) -> World:
    """Select a tile, or swap it with the one already selected."""
    if event.phase != PointerPhase.PRESS:
        return world
    # The board is not interactable while the picture is on show.
    if world.hint_ticks_remaining > 0:
        return world
    if event.cell is None:
        return world

    cell = Position(*event.cell)
    board = world.board
    tile = board.get_tile(*cell)

    if world.selection is None:
        logger.debug("Selected tile %s at %s", tile.home, cell)
        return replace(
            world,
            board=board.with_tile(cell.row, cell.col, tile.with_selected(True)),
            selection=cell,
        )

    first = world.selection
    board = board.swap(first, cell)
    moved = board.get_tile(*cell)
    board = board.with_tile(cell.row, cell.col, moved.with_selected(False))
    logger.debug("Swapped %s <-> %s", first, cell)
    return replace(world, board=board, selection=None)


def on_key(world: World, event: KeyEvent, hint_key: str, reveal_ticks: int) -> World:
    """Restart the hint countdown when *hint_key* is pressed."""
    if event.key != hint_key:
        return world
    logger.info("Hint requested: showing picture for %d ticks", reveal_ticks)
    return replace(world, hint_ticks_remaining=reveal_ticks)


# -- timer --------------------------------------------------------------------


def tick(world: World) -> World:
    """Advance the hint countdown by one clock tick."""
    if world.hint_ticks_remaining == 0:
        return world
    return replace(world, hint_ticks_remaining=world.hint_ticks_remaining - 1)


# -- completion ---------------------------------------------------------------


def is_complete(world: World) -> bool:
    """True iff every tile on the live board sits on its home cell."""
    return world.board.is_solved()
