import random

from octagon.brackets import create_bracket
from octagon.checker import ConflictCache, check_conflict
from octagon.models import Bracket, Conflict, ConflictPlayer, Player, Set
from octagon.resolver import (
    MAX_ATTEMPTS_PER_ROUND,
    calculate_attempts,
    randomize_seeds,
    resolve_conflicts,
)
from octagon.scorer import calculate_conflict_score_cached


def _players(n):
    return [Player(id=i, name=f"Player{i}") for i in range(1, n + 1)]


def test_randomize_keeps_top_two():
    players = _players(5)
    rng = random.Random(7)
    for _ in range(10):
        randomized = randomize_seeds(players, 2, rng)
        assert randomized[0].id == 1
        assert randomized[1].id == 2
        assert len(randomized) == len(players)


def test_randomize_is_permutation():
    players = _players(12)
    randomized = randomize_seeds(players, 3, random.Random(1))
    assert sorted(p.id for p in randomized) == list(range(1, 13))
    assert [p.id for p in players] == list(range(1, 13))


def test_randomize_always_swapping():
    randomized = randomize_seeds(_players(5), 1, random.Random(0))
    assert [p.id for p in randomized] == [1, 2, 4, 5, 3]


def test_calculate_attempts_capped():
    for variance in range(5, 9):
        assert calculate_attempts(variance) == MAX_ATTEMPTS_PER_ROUND


def test_resolve_no_conflicts_keeps_order():
    players = _players(2)
    bracket = Bracket(sets=[Set(player1=1, player2=2)])
    result = resolve_conflicts(bracket, [], players)
    assert [p.id for p in result] == [p.id for p in players]


def test_resolve_improves_score():
    players = _players(8)
    bracket = create_bracket(8)
    conflicts = [Conflict(priority=3, players=[ConflictPlayer(id=4), ConflictPlayer(id=5)])]
    cache = ConflictCache(players, bracket)
    before = calculate_conflict_score_cached(cache, conflicts, players)
    assert before > 0

    result = resolve_conflicts(bracket, conflicts, players, random.Random(42))
    after = calculate_conflict_score_cached(cache, conflicts, result)
    assert after <= before
    assert sorted(p.id for p in result) == list(range(1, 9))
    assert [p.id for p in result[:2]] == [1, 2]
    assert check_conflict(bracket, conflicts, result)[1] <= check_conflict(
        bracket, conflicts, players)[1]