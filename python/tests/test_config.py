"""Session configuration and the reveal-duration table."""

from __future__ import annotations

import pytest

from backend.config import SessionConfig, reveal_duration
from backend.errors import ConfigurationError


@pytest.mark.parametrize(
    "magnitude, ticks",
    [(0, 84), (3, 84), (5, 84), (6, 30), (7, 5), (9, 5), (10, 5)],
)
def test_reveal_buckets(magnitude: int, ticks: int) -> None:
    assert reveal_duration(magnitude) == ticks


@pytest.mark.parametrize("magnitude", [-1, 11, 250, 2.5, "3", True, None])
def test_reveal_rejects_unknown_magnitude(magnitude: object) -> None:
    with pytest.raises(ConfigurationError):
        reveal_duration(magnitude)  # type: ignore[arg-type]


def test_for_magnitude_builds_reference_config() -> None:
    config = SessionConfig.for_magnitude(6)

    assert config.reveal_ticks == 30
    assert (config.rows, config.cols) == (6, 8)
    assert config.board_size == (800, 600)
    assert config.hint_key == "n"


def test_for_magnitude_passes_overrides() -> None:
    config = SessionConfig.for_magnitude(0, rows=3, cols=4, cell_width=10, cell_height=20)

    assert config.reveal_ticks == 84
    assert config.board_size == (40, 60)


def test_with_grid() -> None:
    config = SessionConfig(reveal_ticks=5).with_grid(2, 3)
    assert (config.rows, config.cols) == (2, 3)


@pytest.mark.parametrize(
    "overrides",
    [
        {"rows": 0},
        {"cols": -2},
        {"rows": 1, "cols": 1},
        {"cell_width": 0},
        {"reveal_ticks": -1},
        {"hint_key": ""},
        {"tick_rate": 0},
    ],
)
def test_validate_rejects(overrides: dict) -> None:
    fields = {"reveal_ticks": 5, **overrides}
    with pytest.raises(ConfigurationError):
        SessionConfig(**fields).validate()


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        reveal_duration(99)
