"""Text lines describing conflicts and seed changes."""

from __future__ import annotations

from typing import Sequence

from .models import Conflict, Player, id_to_str

GREEN_UP = "\033[32m↑"
RED_DOWN = "\033[31m↓"
RESET = "\033[0m"


def format_conflicts(conflicts: Sequence[Conflict]) -> list[str]:
    """One line per conflict: both players, priority and reason."""
    return [
        f"{c.players[0].name:<15} {c.players[1].name:>15}  |  p{c.priority} - {c.reason}"
        for c in conflicts
    ]


def format_seeds(before: Sequence[Player], after: Sequence[Player]) -> list[str]:
    """A table of the final seeding, marking how far each player moved."""
    lines = [
        f"{'Seed':<5} {'Rating':<6} {'Name':>25} {'Change':>6} {'ID':<7}",
        "-" * 57,
    ]
    for i, player in enumerate(after):
        seed = i + 1
        prefix = f"{seed:<5} {player.rating:<6.1f} {player.name:>25}"
        ident = id_to_str(player.id)
        for j, original in enumerate(before):
            if player != original:
                continue
            diff = j - i
            if diff > 0:
                lines.append(f"{prefix} {GREEN_UP}{diff:<6}{RESET} {ident}")
            elif diff < 0:
                lines.append(f"{prefix} {RED_DOWN}{-diff:<6}{RESET} {ident}")
            else:
                lines.append(f"{prefix}  {'':<6} {ident}")
    return lines