"""Rich terminal frontend — the picture as a grid of coloured cells.

Each tile is painted with the average colour of its piece of the
picture.  A cursor stands in for the mouse: move it with the arrows or
WASD and press Enter/Space to "click" the cell underneath.
"""

from __future__ import annotations

import math
import random
import time
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import DEFAULT_HINT_KEY
from backend.engine.gameplay import GamePlay
from backend.models.board import Position
from frontend.cli.input_handler import Action, KeyMap, read_action
from frontend.imaging import average_colour
from frontend.session import prepare_session

console = Console()

# Cells are tiny: only their average colour is used.
_CELL_PX = 12
_CELL_W = 4

_MOVES = {
    Action.UP: (-1, 0),
    Action.DOWN: (1, 0),
    Action.LEFT: (0, -1),
    Action.RIGHT: (0, 1),
}


def _colour_handle(piece) -> str:
    return "rgb({},{},{})".format(*average_colour(piece))


def _label(row: int, col: int) -> str:
    return f"{chr(ord('A') + row)}{col + 1}"


# -- board rendering ----------------------------------------------------------


def _render_board(game: GamePlay, cursor: Position | None, labels: bool) -> Table:
    """Return a Rich Table representing the picture grid."""
    world = game.world
    board = world.display_board
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=False,
        box=rich.box.SQUARE,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(board.cols):
        table.add_column(width=_CELL_W, justify="center")

    for r in range(board.rows):
        cells: list[Text] = []
        for c in range(board.cols):
            tile = board.get_tile(r, c)
            body = _label(tile.home_row, tile.home_col) if labels else ""
            style = f"bold white on {tile.image}" if tile.image else "on grey23"
            if not world.showing_hint and tile.selected:
                body, style = "◆◆", f"bold yellow on {tile.image or 'grey23'}"
            elif cursor is not None and (r, c) == cursor and not world.showing_hint:
                body = f"[{body[:2]}]" if body else "[  ]"
            cells.append(Text(body.center(_CELL_W), style=style))
        table.add_row(*cells)

    return table


def _view_key(game: GamePlay, cursor: Position) -> tuple:
    """Everything that changes what is on screen."""
    world = game.world
    secs = math.ceil(world.hint_ticks_remaining / game.config.tick_rate)
    return (world.board.arrangement(), world.selection, secs, cursor, game.is_won)


# -- screens ------------------------------------------------------------------


def _draw_game(game: GamePlay, cursor: Position, labels: bool) -> None:
    console.clear()
    world = game.world

    status = Text()
    if world.showing_hint:
        secs = math.ceil(world.hint_ticks_remaining / game.config.tick_rate)
        status.append("  Memorise the picture… ", style="dim")
        status.append(f"{secs}s", style="bold yellow")
    else:
        status.append("  Swaps: ", style="dim")
        status.append(str(game.swaps), style="bold yellow")

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("Enter", style="bold cyan")
    controls.append("  pick   ", style="dim")
    controls.append(game.config.hint_key.upper(), style="bold cyan")
    controls.append("  show picture   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    panel = Panel(
        Align.center(_render_board(game, cursor, labels)),
        title=f"[bold cyan]Picture Swap  {world.board.rows}×{world.board.cols}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(status))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay, labels: bool) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("SOLVED!", style="bold green")
    congrats.append(f"  {game.swaps} swaps  ", style="green")
    congrats.append("★\n", style="bold yellow")

    panel = Panel(
        Group(
            Align.center(_render_board(game, None, labels)),
            Align.center(congrats),
        ),
        title="[bold green]Picture Swap[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Press R for a new picture, Q to quit.\n", style="dim"))
    )


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay, keymap: KeyMap, labels: bool) -> bool:
    """Run one session.  Returns True if won, False if the player quit."""
    tick_len = 1.0 / game.config.tick_rate
    last_tick = time.monotonic()
    cursor = Position(0, 0)
    shown = None

    while not game.is_won:
        view = _view_key(game, cursor)
        if view != shown:
            _draw_game(game, cursor, labels)
            shown = view

        action = read_action(keymap, tick_len)

        # Catch the clock up with however long the read blocked.
        due = int((time.monotonic() - last_tick) / tick_len)
        for _ in range(due):
            game.tick()
        last_tick += due * tick_len

        if action is None:
            continue
        if action == Action.QUIT:
            return False
        if action in _MOVES:
            dr, dc = _MOVES[action]
            board = game.world.board
            cursor = Position(
                (cursor.row + dr) % board.rows, (cursor.col + dc) % board.cols
            )
        elif action == Action.SELECT:
            game.press(cursor)
        elif action == Action.HINT:
            game.key(game.config.hint_key)

    return True


# -- public entry point -------------------------------------------------------


def run(
    images_dir: Path,
    rows: int = 6,
    cols: int = 8,
    rng: random.Random | None = None,
    labels: bool = False,
    hint_key: str = DEFAULT_HINT_KEY,
    **_: object,
) -> None:
    """Launch the Rich CLI on a random picture from *images_dir*."""
    keymap = KeyMap(hint_key)
    while True:
        game, _picture = prepare_session(
            images_dir,
            rows=rows,
            cols=cols,
            cell_width=_CELL_PX,
            cell_height=_CELL_PX,
            rng=rng,
            convert=_colour_handle,
            hint_key=hint_key,
        )
        if not _play(game, keymap, labels):
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return

        _draw_win(game, labels)
        while True:
            action = read_action(keymap)
            if action == Action.RESTART:
                break
            if action == Action.QUIT:
                return
