import pytest

from octagon.characters import CHARACTERS, get_character_id, levenshtein, normalize


@pytest.mark.parametrize(
    "name,expected",
    [("bayo", 1271), ("zss", 1341), ("pikachu", 1319), ("sora", 1897), ("game&watch", 1405)],
)
def test_exact_names(name, expected):
    assert get_character_id(name) == expected


def test_case_and_punctuation_ignored():
    assert get_character_id("Dr. Mario") == CHARACTERS["dr mario"]
    assert get_character_id("  ZSS  ") == CHARACTERS["zss"]
    assert get_character_id("Pac-Man") == CHARACTERS["pacman"]


def test_typo_resolves_to_nearest():
    assert get_character_id("pikachuu") == CHARACTERS["pikachu"]
    assert get_character_id("ganondorff") == CHARACTERS["ganondorf"]


@pytest.mark.parametrize("name", ["", "   ", "!!!"])
def test_empty_names_have_no_match(name):
    assert get_character_id(name) is None


def test_every_key_maps_to_itself():
    for key, value in CHARACTERS.items():
        assert get_character_id(key) == value


def test_normalize():
    assert normalize("Dr. Mario") == "dr mario"
    assert normalize("game&watch") == "gamewatch"


def test_levenshtein_known_value():
    assert levenshtein("kitten", "sitting") == 3


@pytest.mark.parametrize("a,b", [("fox", "falco"), ("", "mario"), ("link", "toon link")])
def test_levenshtein_invariants(a, b):
    assert levenshtein(a, a) == 0
    assert levenshtein(a, b) == levenshtein(b, a)
    assert levenshtein("", b) == len(b)
    assert levenshtein(a, b) <= max(len(a), len(b))