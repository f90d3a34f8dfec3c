"""User configuration: environment file, player aliases and rating biases."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from dotenv import load_dotenv

from .models import PlayerId, _format_time, _parse_time, id_to_str

log = logging.getLogger(__name__)

CONFIG_SUBDIR = Path(".config") / "octagon"
ENV_FILE = "octagonrc"
ALIAS_FILE = "aliases.json"
BIAS_FILE = "bias.json"


def default_config_dir() -> Path:
    """The directory holding the user's octagon configuration."""
    return Path.home() / CONFIG_SUBDIR


def load_environment(config_dir: Union[str, Path, None] = None) -> Path:
    """Load settings from the config directory's env file, else from ./.env."""
    directory = Path(config_dir) if config_dir is not None else default_config_dir()
    primary = directory / ENV_FILE
    if primary.is_file():
        load_dotenv(primary)
        log.debug("loaded config from %s", primary)
        return primary
    log.warning("unable to load default configuration from %s", primary)

    local = Path.cwd() / ".env"
    if local.is_file():
        load_dotenv(local)
        log.debug("loaded config from .env")
        return local
    raise FileNotFoundError("unable to load a configuration file")


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.astimezone()


def _to_id(text: str) -> PlayerId:
    return int(text) if re.fullmatch(r"-?\d+", text) else text


@dataclass
class Bias:
    """A multiplier applied to one player's rating."""

    player_id: str
    ratio: float
    reason: str = ""
    expiration: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "playerId": self.player_id,
            "ratio": self.ratio,
            "reason": self.reason,
        }
        if self.expiration is not None:
            data["expiration"] = _format_time(self.expiration)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bias":
        expiration = data.get("expiration")
        return cls(
            player_id=data.get("playerId") or "",
            ratio=float(data.get("ratio") or 0.0),
            reason=data.get("reason") or "",
            expiration=_parse_time(expiration) if expiration else None,
        )


def remove_expired_biases(biases: Iterable[Bias],
                          now: Optional[datetime] = None) -> list[Bias]:
    """Keep biases that never expire or expire after ``now``."""
    current = _aware(now) if now is not None else datetime.now().astimezone()
    return [b for b in biases if b.expiration is None or _aware(b.expiration) > current]


class ConfigStore:
    """Reads and writes the JSON files in the configuration directory."""

    def __init__(self, directory: Union[str, Path, None] = None) -> None:
        self.directory = Path(directory) if directory is not None else default_config_dir()
        self._aliases: Optional[dict[str, str]] = None

    def aliases(self) -> dict[str, str]:
        """Map of alias player id to real player id; loaded once."""
        if self._aliases is not None:
            return self._aliases
        path = self.directory / ALIAS_FILE
        self._aliases = {}
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            log.warning("unable to read aliases file: %s", err)
            return self._aliases
        loaded = json.loads(text)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"aliases file {path} must hold a JSON object")
        self._aliases = {str(k): str(v) for k, v in (loaded or {}).items()}
        log.debug("Read %d aliases from %s", len(self._aliases), path)
        return self._aliases

    def resolve_alias(self, user_id: PlayerId) -> PlayerId:
        """Return the real id for an aliased account, or the id unchanged."""
        try:
            aliases = self.aliases()
        except ValueError as err:
            log.error("unable to load aliases: %s", err)
            return user_id
        real = aliases.get(id_to_str(user_id))
        return _to_id(real) if real is not None else user_id

    def biases(self) -> list[Bias]:
        """All biases in the bias file, expired ones included."""
        path = self.directory / BIAS_FILE
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            log.warning("unable to read bias file: %s", err)
            return []
        try:
            loaded = json.loads(text) or []
            biases = [Bias.from_dict(item) for item in loaded]
        except (ValueError, TypeError, AttributeError) as err:
            log.error("unable to parse bias file: %s", err)
            return []
        log.debug("Read %d biases from %s", len(biases), path)
        return biases

    def _write_biases(self, biases: list[Bias]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / BIAS_FILE).write_text(
            json.dumps([b.to_dict() for b in biases], indent=2), encoding="utf-8"
        )

    def save_bias(self, bias: Bias) -> None:
        """Append a bias, dropping expired ones from the file."""
        biases = remove_expired_biases(self.biases())
        biases.append(bias)
        self._write_biases(biases)

    def bias_for_player(self, user_id: PlayerId) -> float:
        """Ratio of the first active bias for a player, 1.0 if none."""
        wanted = id_to_str(user_id)
        for bias in remove_expired_biases(self.biases()):
            if bias.player_id == wanted:
                return bias.ratio
        return 1.0

    def apply_bias(self, user_id: PlayerId, rating: float) -> float:
        """Scale a rating by the player's bias."""
        ratio = self.bias_for_player(user_id)
        if ratio == 1.0:
            return rating
        biased = rating * ratio
        log.debug("Applied bias to %s: %f x %f = %f", user_id, rating, ratio, biased)
        return biased