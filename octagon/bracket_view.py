"""Plain-text drawing of bracket rounds."""

from __future__ import annotations

from typing import Sequence

from .models import Set

NAME_LENGTH = 15
FILL = "x"


def parse_round(round_: int) -> str:
    """Label a start.gg round number: negative rounds are losers side."""
    return f"LR{-round_}" if round_ < 0 else f"WR{round_}"


def _line(seed: int, corner: str) -> str:
    label = f"{seed:2d}{corner}"
    return (label + "─" * (NAME_LENGTH - len(label)))[:NAME_LENGTH]


def render_rounds(rounds: Sequence[Sequence[Set]]) -> str:
    """Draw rounds side by side, each set as two seed lines joined by a bracket."""
    if not rounds or not rounds[0]:
        raise ValueError("there are no rounds to draw")
    height = len(rounds[0]) * 2
    grid = [[FILL] * (NAME_LENGTH * len(rounds)) for _ in range(height)]

    for column, round_sets in enumerate(rounds):
        if not round_sets:
            continue
        spacing = height // len(round_sets)
        first_row = spacing // 2 - 1
        x = NAME_LENGTH * column
        for i, s in enumerate(round_sets):
            y = first_row + i * spacing
            grid[y][x:x + NAME_LENGTH] = _line(s.player1, "┐")
            grid[y + 1][x:x + NAME_LENGTH] = _line(s.player2, "┘")

    return "\n".join("".join(row) for row in grid)