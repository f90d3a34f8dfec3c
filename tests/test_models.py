from datetime import datetime, timedelta, timezone

import pytest

from octagon.models import Bracket, Conflict, ConflictPlayer, Player, Set, id_to_str


def make_conflict():
    return Conflict(
        priority=1,
        reason="test conflict",
        players=[ConflictPlayer(name="Player1", id=123), ConflictPlayer(name="Player2", id=456)],
    )


def test_conflict_check_matches_both_players():
    assert make_conflict().check(123, 456) is True


def test_conflict_check_non_matching():
    assert make_conflict().check(123, 789) is False


def test_conflict_check_same_player():
    assert make_conflict().check(123, 123) is False


def test_conflict_check_mixed_id_types():
    assert make_conflict().check("123", 456.0) is True


@pytest.mark.parametrize(
    "value,expected",
    [(123, "123"), (123.0, "123"), ("456", "456"), (None, "")],
)
def test_id_to_str(value, expected):
    assert id_to_str(value) == expected


def test_to_dict_omits_missing_expiration():
    data = make_conflict().to_dict()
    assert "expiration" not in data
    assert data["players"] == [{"name": "Player1", "id": 123}, {"name": "Player2", "id": 456}]
    assert data["priority"] == 1


def test_round_trip_with_expiration():
    moment = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    conflict = make_conflict()
    conflict.expiration = moment
    data = conflict.to_dict()
    assert data["expiration"].endswith("Z")
    restored = Conflict.from_dict(data)
    assert restored == conflict


def test_from_dict_parses_nanoseconds_and_offset():
    conflict = Conflict.from_dict(
        {"priority": 2, "reason": "r", "players": [], "expiration": "2025-01-02T03:04:05.123456789-07:00"}
    )
    assert conflict.expiration == datetime(
        2025, 1, 2, 3, 4, 5, 123456, tzinfo=timezone(timedelta(hours=-7))
    )


def test_from_dict_defaults():
    conflict = Conflict.from_dict({})
    assert conflict.priority == 0
    assert conflict.reason == ""
    assert conflict.players == []
    assert conflict.expiration is None


def test_player_equality_by_value():
    assert Player(name="a", id=1, rating=2.0) == Player(name="a", id=1, rating=2.0)
    assert Player(name="a", id=1) != Player(name="a", id=2)


def test_bracket_defaults_are_independent():
    first = Bracket()
    first.sets.append(Set(player1=1, player2=2))
    assert Bracket().sets == []
    assert first.sets[0].player2 == 2