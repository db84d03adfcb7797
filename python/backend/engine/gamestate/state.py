"""Snapshot of a game in progress."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.board import Board, Position


@dataclass(frozen=True)
class World:
    """Holds the live board, the reference board, selection and hint timer.

    Worlds are never mutated; every transition returns a new snapshot.
    """

    board: Board
    original: Board
    selection: Position | None = None
    hint_ticks_remaining: int = 0

    def __post_init__(self) -> None:
        selected = self.board.selected_positions()
        assert len(selected) <= 1, f"More than one tile selected: {selected}"
        if self.selection is None:
            assert not selected, f"Tile {selected[0]} selected without a selection"
        else:
            assert selected == [self.selection], (
                f"Selection {self.selection} does not match selected tiles {selected}"
            )
        assert self.hint_ticks_remaining >= 0, "Hint countdown went negative"
        assert (self.board.rows, self.board.cols) == (
            self.original.rows,
            self.original.cols,
        ), "Live and original boards differ in shape"

    @classmethod
    def start(cls, original: Board, shuffled: Board, reveal_ticks: int) -> World:
        """Initial snapshot: nothing selected, picture shown for *reveal_ticks*."""
        return cls(
            board=shuffled,
            original=original,
            selection=None,
            hint_ticks_remaining=reveal_ticks,
        )

    # -- queries --------------------------------------------------------------

    @property
    def is_idle(self) -> bool:
        return self.selection is None

    @property
    def showing_hint(self) -> bool:
        return self.hint_ticks_remaining > 0

    @property
    def display_board(self) -> Board:
        """The board a renderer should draw right now."""
        return self.original if self.showing_hint else self.board
