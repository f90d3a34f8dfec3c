"""Monte Carlo search for a seeding that avoids conflicts."""

from __future__ import annotations

import logging
import random
from types import ModuleType
from typing import Optional, Sequence, Union

from .checker import ConflictCache, check_conflict, list_unresolved_conflicts
from .models import Bracket, Conflict, Player
from .printer import format_conflicts, format_seeds
from .scorer import calculate_conflict_score_cached

log = logging.getLogger(__name__)

CONFLICT_RESOLUTION_ATTEMPTS = 5000
CONFLICT_RESOLUTION_VARIANCE = 8
ATTEMPTS_ADDED_PER_ROUND = 5000
MIN_VARIANCE = 4
MAX_ATTEMPTS_PER_ROUND = 3000

Random = Union[random.Random, ModuleType]


def randomize_seeds(players: Sequence[Player], variance: int,
                    rng: Optional[random.Random] = None) -> list[Player]:
    """Randomly swap players with the seed above; the top two seeds never move."""
    source: Random = rng if rng is not None else random
    shuffled = list(players)
    for i in range(3, len(shuffled)):
        if source.randrange(variance) == 0:
            shuffled[i], shuffled[i - 1] = shuffled[i - 1], shuffled[i]
    return shuffled


def calculate_attempts(variance: int) -> int:
    """Number of random seedings to try at a given variance."""
    extra_rounds = CONFLICT_RESOLUTION_VARIANCE - variance
    return min(
        CONFLICT_RESOLUTION_ATTEMPTS + ATTEMPTS_ADDED_PER_ROUND * extra_rounds,
        MAX_ATTEMPTS_PER_ROUND,
    )


def _search(cache: ConflictCache, conflicts: Sequence[Conflict],
            players: list[Player], initial_score: float,
            rng: Optional[random.Random]) -> tuple[list[Player], float]:
    best = players
    lowest = initial_score
    variance = CONFLICT_RESOLUTION_VARIANCE
    while variance > MIN_VARIANCE and lowest > 0.0:
        attempts = calculate_attempts(variance)
        log.debug("Running monte carlo: variance=%d attempts=%d", variance, attempts)
        for _ in range(attempts):
            candidate = randomize_seeds(players, variance, rng)
            score = calculate_conflict_score_cached(cache, conflicts, candidate)
            if score < lowest:
                log.debug("Found new best: variance=%d score=%.2f", variance, score)
                lowest = score
                best = candidate
        if lowest == 0.0:
            log.info("Perfect solution found, terminating early")
            break
        variance -= 1
    return best, lowest


def resolve_conflicts(bracket: Bracket, conflicts: Sequence[Conflict],
                      players: Sequence[Player],
                      rng: Optional[random.Random] = None) -> list[Player]:
    """Return a seeding close to ``players`` with as few conflicts as found."""
    original = list(players)
    cache = ConflictCache(original, bracket)
    lowest = calculate_conflict_score_cached(cache, conflicts, original)

    log.info("conflictScore before resolution: %.2f", lowest)
    for line in format_conflicts(list_unresolved_conflicts(bracket, conflicts, original)):
        log.info(line)

    best = original
    if lowest > 0.0:
        best, lowest = _search(cache, conflicts, original, lowest, rng)

    log.info("Seeds after conflict resolution (score %.2f)", lowest)
    for line in format_seeds(original, best):
        log.info(line)

    _, remaining = check_conflict(bracket, conflicts, best)
    if remaining > 0:
        log.warning("%d conflicts were unresolved", remaining)
        for line in format_conflicts(list_unresolved_conflicts(bracket, conflicts, best)):
            log.info(line)

    log.debug("Finished conflict resolution, score %.2f", lowest)
    return list(best)