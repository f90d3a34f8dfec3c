"""Scoring a seeding by its conflicts and how far it moved players."""

from __future__ import annotations

import math
from typing import Sequence

from .checker import ConflictCache, check_conflict_cached
from .models import Conflict, Player

PRUNING_THRESHOLD = 20.0
PRUNING_PENALTY = 1000.0


def calculate_importance(seed_index: int) -> float:
    """How much it matters to keep a seed in place, between 0.25 and 1."""
    log = math.log2(seed_index + 1)
    if log == 0:
        return 1.0
    importance = 32.0 / log ** 3
    return min(1.0, max(0.25, importance))


def _diff(new_index: int, old_index: int) -> float:
    return (abs(new_index - old_index) * calculate_importance(old_index)) ** 1.5


def calculate_seed_diff_score(players: Sequence[Player],
                              new_players: Sequence[Player]) -> float:
    """Penalty for moving players away from their original seeds."""
    total = sum(
        _diff(i, j)
        for i, p in enumerate(new_players)
        for j, q in enumerate(players)
        if p.id == q.id
    )
    return total / 2


def calculate_seed_diff_score_cached(cache: ConflictCache,
                                     new_players: Sequence[Player]) -> float:
    """calculate_seed_diff_score using the cache's original positions."""
    total = 0.0
    for i, player in enumerate(new_players):
        original = cache.player_index_map.get(player.id)
        if original is not None:
            total += _diff(i, original)
    return total / 2


def calculate_conflict_score_cached(cache: ConflictCache, conflicts: Sequence[Conflict],
                                    new_players: Sequence[Player]) -> float:
    """Total score of a seeding; heavily conflicted seedings are pruned early."""
    conflict_score, _ = check_conflict_cached(cache, conflicts, new_players)
    if conflict_score > PRUNING_THRESHOLD:
        return conflict_score + PRUNING_PENALTY
    return conflict_score + calculate_seed_diff_score_cached(cache, new_players)