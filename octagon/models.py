"""Core data types shared by bracket building and conflict resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

PlayerId = Union[int, float, str]

_FRACTION = re.compile(r"\.(\d+)")


def id_to_str(value: Any) -> str:
    """Render a player identifier the way it appears in URLs and files."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.isoformat()
    if moment.utcoffset() == timezone.utc.utcoffset(None):
        text = text[: -len("+00:00")] + "Z"
    return text


def _parse_time(text: str) -> datetime:
    cleaned = text.strip()
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"
    cleaned = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), cleaned, count=1)
    return datetime.fromisoformat(cleaned)


@dataclass(frozen=True)
class Player:
    """A seeded entrant: gamer tag, start.gg id and rating."""

    name: str = ""
    id: PlayerId = 0
    rating: float = 0.0


@dataclass(eq=False)
class Set:
    """A match between two seed numbers; player1 is the better seed."""

    player1: int = 0
    player2: int = 0
    name: str = ""
    winner_set: Optional["Set"] = None
    loser_set: Optional["Set"] = None


@dataclass
class Bracket:
    """A double elimination bracket laid out by seed numbers."""

    sets: list[Set] = field(default_factory=list)
    winners_rounds: list[list[Set]] = field(default_factory=list)
    losers_rounds: list[list[Set]] = field(default_factory=list)


@dataclass
class ConflictPlayer:
    """A player named in a conflict."""

    name: str = ""
    id: PlayerId = 0


@dataclass
class Conflict:
    """Players that should not meet early in a bracket."""

    priority: int = 0
    reason: str = ""
    players: list[ConflictPlayer] = field(default_factory=list)
    expiration: Optional[datetime] = None

    def check(self, p1: PlayerId, p2: PlayerId) -> bool:
        """Return True if both p1 and p2 take part in this conflict."""
        wanted = (id_to_str(p1), id_to_str(p2))
        seen_one = False
        for player in self.players:
            if id_to_str(player.id) in wanted:
                if seen_one:
                    return True
                seen_one = True
        return False

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON shape of the conflicts file."""
        data: dict[str, Any] = {
            "priority": self.priority,
            "reason": self.reason,
            "players": [{"name": p.name, "id": p.id} for p in self.players],
        }
        if self.expiration is not None:
            data["expiration"] = _format_time(self.expiration)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conflict":
        """Build a conflict from its JSON representation."""
        expiration = data.get("expiration")
        return cls(
            priority=int(data.get("priority") or 0),
            reason=data.get("reason") or "",
            players=[
                ConflictPlayer(name=p.get("name") or "", id=p.get("id"))
                for p in data.get("players") or []
            ],
            expiration=_parse_time(expiration) if expiration else None,
        )