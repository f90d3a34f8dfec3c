from octagon.checker import ConflictCache
from octagon.models import Bracket, Conflict, ConflictPlayer, Player, Set
from octagon.scorer import (
    PRUNING_PENALTY,
    calculate_conflict_score_cached,
    calculate_importance,
    calculate_seed_diff_score,
    calculate_seed_diff_score_cached,
)


def _original():
    return [Player(id=1, name="Player1"), Player(id=2, name="Player2"),
            Player(id=3, name="Player3")]


def test_importance_in_range():
    for i in range(32):
        assert 0.25 <= calculate_importance(i) <= 1.0


def test_importance_decreases():
    top = calculate_importance(0)
    mid = calculate_importance(15)
    low = calculate_importance(31)
    assert top > mid > low


def test_seed_diff_zero_for_identical():
    assert calculate_seed_diff_score(_original(), _original()) == 0.0


def test_seed_diff_positive_for_swap():
    swapped = [Player(id=2, name="Player2"), Player(id=1, name="Player1"),
               Player(id=3, name="Player3")]
    assert calculate_seed_diff_score(_original(), swapped) > 0.0


def test_cached_seed_diff_agrees():
    original = _original()
    cache = ConflictCache(original, Bracket())
    moved = [original[2], original[0], original[1]]
    assert calculate_seed_diff_score_cached(cache, moved) == calculate_seed_diff_score(
        original, moved
    )


def test_conflict_score_without_conflicts_is_seed_diff():
    original = _original()
    cache = ConflictCache(original, Bracket(sets=[Set(player1=1, player2=2)]))
    moved = [original[1], original[0], original[2]]
    assert calculate_conflict_score_cached(cache, [], moved) == \
        calculate_seed_diff_score_cached(cache, moved)


def test_conflict_score_is_pruned():
    original = _original()
    cache = ConflictCache(original, Bracket(sets=[Set(player1=1, player2=2)]))
    conflict = Conflict(priority=30, players=[ConflictPlayer(id=1), ConflictPlayer(id=2)])
    assert calculate_conflict_score_cached(cache, [conflict], original) > PRUNING_PENALTY


def test_small_conflict_not_pruned():
    original = _original()
    cache = ConflictCache(original, Bracket(sets=[Set(player1=1, player2=2)]))
    conflict = Conflict(priority=1, players=[ConflictPlayer(id=1), ConflictPlayer(id=2)])
    assert calculate_conflict_score_cached(cache, [conflict], original) == 3.0