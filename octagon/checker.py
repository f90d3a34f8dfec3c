"""Counting conflicts between players who meet in a bracket."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .models import Bracket, Conflict, Player, PlayerId, Set, id_to_str


class ConflictCache:
    """Lookups computed once per resolution run to speed up scoring."""

    def __init__(self, players: Sequence[Player], bracket: Bracket) -> None:
        self.player_index_map: dict[PlayerId, int] = {}
        self.string_cache: dict[PlayerId, str] = {}
        for index, player in enumerate(players):
            self.player_index_map[player.id] = index
            self.string_cache[player.id] = id_to_str(player.id)
        self.conflict_sets: list[Set] = [s for s in bracket.sets if s is not None]


def check_cached(conflict: Conflict, p1: PlayerId, p2: PlayerId,
                 cache: ConflictCache) -> bool:
    """Like Conflict.check, using the cache's string forms of player ids."""
    wanted = (cache.string_cache.get(p1, ""), cache.string_cache.get(p2, ""))
    seen_one = False
    for player in conflict.players:
        text = cache.string_cache.get(player.id) or id_to_str(player.id)
        if text in wanted:
            if seen_one:
                return True
            seen_one = True
    return False


def _pairs(sets: Iterable[Optional[Set]], players: Sequence[Player]):
    for s in sets:
        if s is None:
            continue
        yield players[s.player1 - 1].id, players[s.player2 - 1].id


def check_conflict(bracket: Bracket, conflicts: Sequence[Conflict],
                   players: Sequence[Player]) -> tuple[float, int]:
    """Return the conflict score and the number of conflicting sets."""
    score = 0.0
    count = 0
    for p1, p2 in _pairs(bracket.sets, players):
        for conflict in conflicts:
            if conflict.check(p1, p2):
                score += 2 + conflict.priority
                count += 1
    return score, count


def check_conflict_cached(cache: ConflictCache, conflicts: Sequence[Conflict],
                          players: Sequence[Player]) -> tuple[float, int]:
    """check_conflict over the cache's pre-filtered sets."""
    score = 0.0
    count = 0
    for p1, p2 in _pairs(cache.conflict_sets, players):
        for conflict in conflicts:
            if check_cached(conflict, p1, p2, cache):
                score += 2 + conflict.priority
                count += 1
    return score, count


def list_unresolved_conflicts(bracket: Bracket, conflicts: Sequence[Conflict],
                              players: Sequence[Player]) -> list[Conflict]:
    """Every conflict hit by a set of the bracket, once per set."""
    return [
        conflict
        for p1, p2 in _pairs(bracket.sets, players)
        for conflict in conflicts
        if conflict.check(p1, p2)
    ]