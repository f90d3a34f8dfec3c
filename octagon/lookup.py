"""Finding cached players by gamer tag and parsing expiry durations."""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal

from .cache import Cache, CachedPlayer, player_key
from .characters import levenshtein

_NANOS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class PlayerNotFound(LookupError):
    """No cached player matches a name."""


def _parse_standard(text: str) -> timedelta:
    rest = text
    sign = 1
    if rest and rest[0] in "+-":
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration {text!r}")
    total = Decimal(0)
    pos = 0
    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        total += Decimal(match.group(1)) * _NANOS[match.group(2)]
        pos = match.end()
    micros = (sign * total / 1000).to_integral_value()
    return timedelta(microseconds=int(micros))


def parse_duration(text: str) -> timedelta:
    """Parse durations like '90m', '24h', '7d' or '2w'."""
    for suffix, factor in (("d", 24), ("w", 168)):
        if text.endswith(suffix):
            try:
                return _parse_standard(text[:-1] + "h") * factor
            except ValueError:
                pass
    return _parse_standard(text)


def find_player(cache: Cache, name: str) -> CachedPlayer:
    """Return the cached player with this tag, or the closest one by edit distance."""
    try:
        return CachedPlayer.from_json(cache.get(player_key(name)))
    except (KeyError, ValueError):
        pass

    players = cache.cached_players()
    if not players:
        raise PlayerNotFound("no players in cache - run 'octagon cache populate' first")

    search = name.lower()
    max_distance = max(len(name.encode("utf-8")) // 2, 2)
    matches = [
        (distance, player)
        for player in players
        if (distance := levenshtein(search, player.name.lower())) <= max_distance
    ]
    if not matches:
        raise PlayerNotFound(f"no matches found for '{name}'")
    return min(matches, key=lambda match: match[0])[1]