"""Board model for the picture swap puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterator, NamedTuple, Sequence

from backend.errors import OutOfRange


class Position(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class Tile:
    """One cell of the picture.

    ``home_row``/``home_col`` locate the tile in the unshuffled image and
    travel with it on every swap.  ``image`` is whatever the frontend
    cropped for this cell and takes no part in equality.
    """

    home_row: int
    home_col: int
    image: Any = field(default=None, compare=False, repr=False)
    selected: bool = False

    @property
    def home(self) -> Position:
        return Position(self.home_row, self.home_col)

    def with_selected(self, selected: bool) -> Tile:
        if selected == self.selected:
            return self
        return replace(self, selected=selected)


@dataclass(frozen=True)
class Board:
    """Immutable ``rows × cols`` grid of tiles.

    Every mutator returns a new board; callers that want in-place
    semantics rebind the result.
    """

    tiles: tuple[tuple[Tile, ...], ...]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_images(cls, grid: Sequence[Sequence[Any]]) -> Board:
        """Create a solved board from a row-major grid of sub-images.

        The tile built from ``grid[r][c]`` has its home at ``(r, c)``.
        """
        if not grid or not grid[0]:
            raise ValueError("Image grid must have at least one row and column.")
        cols = len(grid[0])
        if any(len(row) != cols for row in grid):
            raise ValueError("Image grid rows must all have the same length.")
        return cls(
            tiles=tuple(
                tuple(Tile(r, c, image) for c, image in enumerate(row))
                for r, row in enumerate(grid)
            )
        )

    @classmethod
    def from_flat(cls, rows: int, cols: int, flat: Sequence[Tile]) -> Board:
        """Create a board from a flat row-major tile sequence."""
        if len(flat) != rows * cols:
            raise ValueError(
                f"Expected {rows * cols} tiles for a {rows}×{cols} board, "
                f"got {len(flat)}."
            )
        return cls(
            tiles=tuple(
                tuple(flat[r * cols : (r + 1) * cols]) for r in range(rows)
            )
        )

    # -- queries --------------------------------------------------------------

    @property
    def rows(self) -> int:
        return len(self.tiles)

    @property
    def cols(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_tile(self, row: int, col: int) -> Tile:
        if not self.contains(row, col):
            raise OutOfRange(row, col, self.rows, self.cols)
        return self.tiles[row][col]

    def flat(self) -> tuple[Tile, ...]:
        """All tiles in row-major order."""
        return tuple(tile for row in self.tiles for tile in row)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.flat())

    def arrangement(self) -> tuple[Position, ...]:
        """Home positions of the tiles, read in row-major order."""
        return tuple(tile.home for tile in self.flat())

    def selected_positions(self) -> list[Position]:
        return [
            Position(r, c)
            for r, row in enumerate(self.tiles)
            for c, tile in enumerate(row)
            if tile.selected
        ]

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if the tile at (row, col) sits on its home cell."""
        return self.get_tile(row, col).home == (row, col)

    def is_solved(self) -> bool:
        """Check if every tile is back in its home cell.

        Reading the board row-major, the home indices must be strictly
        increasing; for a permutation of the full grid that only happens
        when each tile's home index equals its own index.
        """
        indices = [t.home_row * self.cols + t.home_col for t in self.flat()]
        return all(a < b for a, b in zip(indices, indices[1:]))

    # -- updates --------------------------------------------------------------

    def with_tile(self, row: int, col: int, tile: Tile) -> Board:
        """Return a copy with the single cell (row, col) replaced."""
        if not self.contains(row, col):
            raise OutOfRange(row, col, self.rows, self.cols)
        new_row = self.tiles[row][:col] + (tile,) + self.tiles[row][col + 1 :]
        return Board(tiles=self.tiles[:row] + (new_row,) + self.tiles[row + 1 :])

    def swap(self, a: Position, b: Position) -> Board:
        """Return a copy with the tiles at *a* and *b* exchanged."""
        a, b = Position(*a), Position(*b)
        tile_a = self.get_tile(*a)
        tile_b = self.get_tile(*b)
        return self.with_tile(a.row, a.col, tile_b).with_tile(b.row, b.col, tile_a)
