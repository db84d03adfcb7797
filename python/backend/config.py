"""Session configuration and the hint reveal-duration table."""

from __future__ import annotations

from dataclasses import dataclass, replace

from backend.errors import ConfigurationError

# (lowest magnitude, highest magnitude, reveal ticks). Smaller images get
# a longer look at the unshuffled picture.
REVEAL_BUCKETS: tuple[tuple[int, int, int], ...] = (
    (0, 5, 84),
    (6, 6, 30),
    (7, 10, 5),
)

DEFAULT_ROWS = 6
DEFAULT_COLS = 8
DEFAULT_CELL_PX = 100
DEFAULT_HINT_KEY = "n"
DEFAULT_TICK_RATE = 28


def reveal_duration(magnitude: int) -> int:
    """Map an image size magnitude to the number of hint-reveal ticks."""
    if isinstance(magnitude, bool) or not isinstance(magnitude, int):
        raise ConfigurationError(
            f"Image size magnitude must be an integer, got {magnitude!r}."
        )
    for low, high, ticks in REVEAL_BUCKETS:
        if low <= magnitude <= high:
            return ticks
    raise ConfigurationError(
        f"Image size magnitude {magnitude} is outside the known range "
        f"{REVEAL_BUCKETS[0][0]}-{REVEAL_BUCKETS[-1][1]}."
    )


@dataclass(frozen=True)
class SessionConfig:
    """Everything a session needs to know up front."""

    reveal_ticks: int
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    cell_width: int = DEFAULT_CELL_PX
    cell_height: int = DEFAULT_CELL_PX
    hint_key: str = DEFAULT_HINT_KEY
    tick_rate: int = DEFAULT_TICK_RATE

    @classmethod
    def for_magnitude(cls, magnitude: int, **overrides) -> SessionConfig:
        """Build a config whose reveal duration comes from the bucket table."""
        return cls(reveal_ticks=reveal_duration(magnitude), **overrides).validate()

    def with_grid(self, rows: int, cols: int) -> SessionConfig:
        return replace(self, rows=rows, cols=cols).validate()

    @property
    def board_size(self) -> tuple[int, int]:
        """Board area in pixels as ``(width, height)``."""
        return self.cols * self.cell_width, self.rows * self.cell_height

    def validate(self) -> SessionConfig:
        """Return *self*, or raise ``ConfigurationError`` if unusable."""
        if self.rows < 1 or self.cols < 1:
            raise ConfigurationError(
                f"Grid must be at least 1×1, got {self.rows}×{self.cols}."
            )
        if self.rows * self.cols < 2:
            raise ConfigurationError("A 1×1 grid can never be shuffled.")
        if self.cell_width < 1 or self.cell_height < 1:
            raise ConfigurationError(
                f"Cell size must be positive, got "
                f"{self.cell_width}×{self.cell_height}."
            )
        if self.reveal_ticks < 0:
            raise ConfigurationError(
                f"Reveal duration cannot be negative ({self.reveal_ticks})."
            )
        if not self.hint_key:
            raise ConfigurationError("Hint key must not be empty.")
        if self.tick_rate < 1:
            raise ConfigurationError(
                f"Tick rate must be positive, got {self.tick_rate}."
            )
        return self
