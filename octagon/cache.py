"""A small persistent key-value cache with expiring entries."""

from __future__ import annotations

import json
import logging
import sqlite3
import struct
import tempfile
import time
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional, Union

from .models import PlayerId, id_to_str

log = logging.getLogger(__name__)

DEFAULT_PATH = Path(tempfile.gettempdir()) / "octagon-cache"
DEFAULT_TTL = timedelta(hours=24)
PLAYER_PREFIX = b"player_name:"
RATING_KEY = "rating-{}"

Key = Union[bytes, str]


def _as_bytes(value: Key) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


def player_key(name: str) -> bytes:
    """Cache key under which a player is stored by gamer tag."""
    return PLAYER_PREFIX + name.lower().encode("utf-8")


@dataclass
class CachedPlayer:
    """A gamer tag and the start.gg player id it belongs to."""

    name: str = ""
    id: Any = None

    def to_json(self) -> bytes:
        return json.dumps({"name": self.name, "id": self.id}).encode("utf-8")

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "CachedPlayer":
        parsed = json.loads(data)
        if not isinstance(parsed, dict):
            raise ValueError("cached player must be a JSON object")
        return cls(name=parsed.get("name") or "", id=parsed.get("id"))


class Cache:
    """Key-value store on disk; every entry expires after ``ttl``."""

    def __init__(self, path: Union[str, Path, None] = None,
                 ttl: Union[timedelta, float] = DEFAULT_TTL) -> None:
        self.path = Path(path) if path is not None else DEFAULT_PATH
        self.ttl = ttl if isinstance(ttl, timedelta) else timedelta(seconds=ttl)
        log.debug("Opening cache at %s", self.path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._db = sqlite3.connect(str(self.path))
        with self._db:
            self._db.execute(
                "CREATE TABLE IF NOT EXISTS entries ("
                "key BLOB PRIMARY KEY, value BLOB NOT NULL, expires REAL NOT NULL)"
            )

    def set(self, key: Key, value: Key) -> None:
        """Store a value, replacing any previous one."""
        raw_key = _as_bytes(key)
        log.debug("Setting key %r in cache", raw_key)
        expires = time.time() + self.ttl.total_seconds()
        with self._db:
            self._db.execute(
                "INSERT OR REPLACE INTO entries (key, value, expires) VALUES (?, ?, ?)",
                (raw_key, _as_bytes(value), expires),
            )

    def get(self, key: Key) -> bytes:
        """Return the stored value; raise KeyError if it is missing or expired."""
        raw_key = _as_bytes(key)
        row = self._db.execute(
            "SELECT value FROM entries WHERE key = ? AND expires > ?",
            (raw_key, time.time()),
        ).fetchone()
        if row is None:
            raise KeyError(raw_key)
        log.debug("Fetched key %r from cache", raw_key)
        return bytes(row[0])

    def clear(self) -> None:
        """Drop every entry."""
        with self._db:
            self._db.execute("DELETE FROM entries")

    def close(self) -> None:
        self._db.close()

    def cached_players(self) -> list[CachedPlayer]:
        """All players stored by name, in key order; unreadable entries are skipped."""
        rows = self._db.execute(
            "SELECT value FROM entries WHERE substr(key, 1, ?) = ? AND expires > ? "
            "ORDER BY key",
            (len(PLAYER_PREFIX), PLAYER_PREFIX, time.time()),
        ).fetchall()
        players = []
        for (value,) in rows:
            try:
                players.append(CachedPlayer.from_json(bytes(value)))
            except ValueError:
                continue
        return players

    def store_player(self, player: CachedPlayer) -> None:
        """Store a player under its lower-cased gamer tag."""
        self.set(player_key(player.name), player.to_json())

    def get_rating(self, user_id: PlayerId) -> Optional[float]:
        """Return a cached rating, or None when there is none."""
        try:
            data = self.get(RATING_KEY.format(id_to_str(user_id)))
        except KeyError:
            return None
        (rating,) = struct.unpack_from("<d", data)
        log.debug("Found cached rating for %s: %f", user_id, rating)
        return rating

    def set_rating(self, user_id: PlayerId, rating: float) -> None:
        """Cache a rating as a little-endian float64."""
        self.set(RATING_KEY.format(id_to_str(user_id)), struct.pack("<d", rating))

    def __enter__(self) -> "Cache":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()