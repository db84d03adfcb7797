"""Pygame GUI frontend — draws the board and feeds pointer/key/clock events.

The window shows the shuffled picture.  Click one tile, then another, to
swap them; press the hint key to see the whole picture for a moment.
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from pathlib import Path

import pygame

from backend.config import DEFAULT_HINT_KEY
from backend.engine.gameplay import GamePlay, PointerEvent, PointerPhase
from backend.engine.gamestate import World
from backend.models.board import Board, Position
from frontend.session import prepare_session

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_YELLOW = (249, 226, 175)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
MARGIN = 20
HEADER_H = 60
FOOTER_H = 44
SELECT_BORDER = 4


@dataclass(frozen=True)
class BoardLayout:
    """Where the board sits in the window."""

    origin_x: int
    origin_y: int
    cell_width: int
    cell_height: int

    def tile_rect(self, r: int, c: int) -> pygame.Rect:
        return pygame.Rect(
            self.origin_x + c * self.cell_width,
            self.origin_y + r * self.cell_height,
            self.cell_width,
            self.cell_height,
        )

    def board_rect(self, rows: int, cols: int) -> pygame.Rect:
        return pygame.Rect(
            self.origin_x,
            self.origin_y,
            cols * self.cell_width,
            rows * self.cell_height,
        )


def pointer_to_cell(
    x: int, y: int, board: Board, layout: BoardLayout
) -> tuple[bool, int, int]:
    """Map window coordinates to ``(on_board, row, col)``.

    Off the board the row and column are ``-1``.
    """
    dx = x - layout.origin_x
    dy = y - layout.origin_y
    if dx < 0 or dy < 0:
        return False, -1, -1
    row, col = dy // layout.cell_height, dx // layout.cell_width
    if not board.contains(row, col):
        return False, -1, -1
    return True, row, col


def to_pointer_event(
    ev: pygame.event.Event, board: Board, layout: BoardLayout
) -> PointerEvent | None:
    """Translate a left-button mouse event, or return ``None`` for anything else."""
    if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
        phase = PointerPhase.PRESS
    elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
        phase = PointerPhase.RELEASE
    elif ev.type == pygame.MOUSEMOTION and ev.buttons[0]:
        phase = PointerPhase.DRAG
    else:
        return None
    on_board, row, col = pointer_to_cell(*ev.pos, board, layout)
    return PointerEvent(phase, Position(row, col) if on_board else None)


# ---------------------------------------------------------------------------
# Screen enum
# ---------------------------------------------------------------------------
class _Screen(enum.Enum):
    PLAYING = "playing"
    WIN = "win"


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------
def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, ((surf.get_width() - rendered.get_width()) // 2, y))


def render_board(surf: pygame.Surface, world: World, layout: BoardLayout) -> None:
    """Draw the board the world says to show, highlighting the selection."""
    board = world.display_board
    pygame.draw.rect(
        surf, COL_MANTLE, layout.board_rect(board.rows, board.cols).inflate(8, 8),
        border_radius=6,
    )
    for r in range(board.rows):
        for c in range(board.cols):
            tile = board.get_tile(r, c)
            rect = layout.tile_rect(r, c)
            if tile.image is not None:
                surf.blit(tile.image, rect.topleft)
            else:
                pygame.draw.rect(surf, COL_SURFACE1, rect)
            if world.showing_hint:
                continue
            pygame.draw.rect(surf, COL_MANTLE, rect, width=1)
            if tile.selected:
                pygame.draw.rect(surf, COL_YELLOW, rect, width=SELECT_BORDER)


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(
        self,
        images_dir: Path,
        *,
        rows: int,
        cols: int,
        cell_px: int,
        rng: random.Random | None = None,
        hint_key: str = DEFAULT_HINT_KEY,
    ) -> None:
        self._images_dir = images_dir
        self._hint_key = hint_key.lower()
        self._rows = rows
        self._cols = cols
        self._cell_px = cell_px
        self._rng = rng

        pygame.init()
        win_w = cols * cell_px + 2 * MARGIN
        win_h = rows * cell_px + HEADER_H + FOOTER_H
        self._surf = pygame.display.set_mode((win_w, win_h))
        pygame.display.set_caption("Picture Swap")
        self._clock = pygame.time.Clock()
        self._layout = BoardLayout(MARGIN, HEADER_H, cell_px, cell_px)
        logger.debug("Opened %d×%d window", win_w, win_h)

        # Fonts
        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._screen = _Screen.PLAYING
        self._game: GamePlay | None = None
        self._picture: pygame.Surface | None = None

    # ── game state ──────────────────────────────────────────────────────────

    def _start_game(self) -> None:
        self._game, self._picture = prepare_session(
            self._images_dir,
            rows=self._rows,
            cols=self._cols,
            cell_width=self._cell_px,
            cell_height=self._cell_px,
            rng=self._rng,
            hint_key=self._hint_key,
        )
        self._screen = _Screen.PLAYING

    def _check_win(self) -> None:
        game = self._game
        if game is not None and game.is_won and self._screen != _Screen.WIN:
            self._screen = _Screen.WIN

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        world = game.world

        _blit_center(
            self._surf,
            self._f_title.render(
                f"Picture Swap  {world.board.rows}×{world.board.cols}",
                True,
                COL_TEXT,
            ),
            8,
        )
        if world.showing_hint:
            secs = world.hint_ticks_remaining / game.config.tick_rate
            status = f"Memorise the picture… {secs:.1f}s"
        else:
            status = f"Swaps: {game.swaps}"
        _blit_center(self._surf, self._f_body.render(status, True, COL_PINK), 34)

        render_board(self._surf, world, self._layout)

        hint_text = (
            f"Click two tiles to swap     "
            f"{game.config.hint_key.upper()}  show picture     Esc  quit"
        )
        _blit_center(
            self._surf,
            self._f_small.render(hint_text, True, COL_OVERLAY0),
            self._surf.get_height() - FOOTER_H + 14,
        )

    def _draw_win(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None

        if self._picture is not None:
            self._surf.blit(self._picture, (MARGIN, HEADER_H))
        _blit_center(
            self._surf,
            self._f_big.render("★  S O L V E D  ★", True, COL_GREEN),
            10,
        )
        _blit_center(
            self._surf,
            self._f_small.render(
                f"{game.swaps} swaps     R  new picture     Esc  quit",
                True,
                COL_OVERLAY0,
            ),
            self._surf.get_height() - FOOTER_H + 14,
        )

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        assert game is not None
        pointer = to_pointer_event(ev, game.world.board, self._layout)
        if pointer is not None:
            game.pointer(pointer)
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_ESCAPE:
                return False
            game.key(pygame.key.name(ev.key))
        return True

    def _ev_win(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_r, pygame.K_RETURN):
                self._start_game()
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    # ── main loop ───────────────────────────────────────────────────────────

    def handle_events(self, events: list[pygame.event.Event]) -> bool:
        """Dispatch one frame's events.  Returns False when the app should close."""
        dispatch = {
            _Screen.PLAYING: self._ev_game,
            _Screen.WIN: self._ev_win,
        }
        for ev in events:
            if ev.type == pygame.QUIT:
                return False
            handler = dispatch.get(self._screen)
            if handler and not handler(ev):
                return False
            self._check_win()
        return True

    def run_loop(self) -> None:
        _draw = {
            _Screen.PLAYING: self._draw_game,
            _Screen.WIN: self._draw_win,
        }

        try:
            self._start_game()
            while self.handle_events(pygame.event.get()):
                game = self._game
                assert game is not None
                if self._screen == _Screen.PLAYING:
                    game.tick()
                    self._check_win()

                drawer = _draw.get(self._screen)
                if drawer:
                    drawer()
                pygame.display.flip()
                self._clock.tick(game.config.tick_rate)
        finally:
            pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    images_dir: Path,
    rows: int = 6,
    cols: int = 8,
    cell_px: int = 100,
    rng: random.Random | None = None,
    hint_key: str = DEFAULT_HINT_KEY,
    **_: object,
) -> None:
    """Launch the Pygame GUI on a random picture from *images_dir*."""
    app = PygameApp(
        images_dir, rows=rows, cols=cols, cell_px=cell_px, rng=rng, hint_key=hint_key
    )
    app.run_loop()
