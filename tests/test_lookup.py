from datetime import timedelta

import pytest

from octagon.cache import Cache, CachedPlayer, player_key
from octagon.lookup import PlayerNotFound, find_player, parse_duration


@pytest.fixture
def cache(tmp_path):
    store = Cache(tmp_path / "cache.db")
    yield store
    store.close()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("24h", timedelta(hours=24)),
        ("7d", timedelta(days=7)),
        ("2w", timedelta(weeks=2)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5h", timedelta(hours=1.5)),
        ("0", timedelta(0)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


def test_day_and_hour_forms_agree():
    assert parse_duration("3d") == parse_duration("72h")
    assert parse_duration("1w") == parse_duration("7d")


@pytest.mark.parametrize("text", ["", "abc", "5", "xd", "1y"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_find_player_exact(cache):
    cache.store_player(CachedPlayer("Alpha", 1))
    cache.store_player(CachedPlayer("Bravo", 2))
    assert find_player(cache, "ALPHA") == CachedPlayer("Alpha", 1)


def test_find_player_fuzzy(cache):
    cache.store_player(CachedPlayer("Alpha", 1))
    cache.store_player(CachedPlayer("Bravo", 2))
    assert find_player(cache, "Bravx") == CachedPlayer("Bravo", 2)


def test_find_player_skips_broken_exact_entry(cache):
    cache.store_player(CachedPlayer("Charlie", 3))
    cache.set(player_key("Charlee"), b"not json")
    assert find_player(cache, "Charlee") == CachedPlayer("Charlie", 3)


def test_find_player_no_match(cache):
    cache.store_player(CachedPlayer("Alpha", 1))
    with pytest.raises(PlayerNotFound):
        find_player(cache, "zzzzzzzzzz")


def test_find_player_empty_cache(cache):
    with pytest.raises(PlayerNotFound, match="cache populate"):
        find_player(cache, "anyone")