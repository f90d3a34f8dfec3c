"""Reading and writing the conflicts file."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union

from .config import default_config_dir
from .models import Conflict

log = logging.getLogger(__name__)

CONFLICT_FILE = "conflicts.json"


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.astimezone()


def remove_expired(conflicts: Iterable[Conflict],
                   now: Optional[datetime] = None) -> list[Conflict]:
    """Keep conflicts that never expire or expire after ``now``."""
    current = _aware(now) if now is not None else datetime.now().astimezone()
    return [c for c in conflicts if c.expiration is None or _aware(c.expiration) > current]


class ConflictStore:
    """Conflict files kept in the configuration directory."""

    def __init__(self, directory: Union[str, Path, None] = None) -> None:
        self.directory = Path(directory) if directory is not None else default_config_dir()

    def read(self, file_name: str = CONFLICT_FILE) -> list[Conflict]:
        """Read conflicts from a file; a missing or broken file gives none."""
        path = self.directory / file_name
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            log.warning("unable to read conflicts file: %s", err)
            return []
        try:
            conflicts = [Conflict.from_dict(item) for item in json.loads(text) or []]
        except (ValueError, TypeError, AttributeError) as err:
            log.error("unable to parse conflicts file: %s", err)
            return []
        log.info("Read %d conflicts from %s", len(conflicts), path)
        if not conflicts:
            log.warning("No conflicts found in conflict file")
        return conflicts

    def write(self, conflicts: Iterable[Conflict], file_name: str = CONFLICT_FILE) -> None:
        """Overwrite a conflicts file."""
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / file_name).write_text(
            json.dumps([c.to_dict() for c in conflicts], indent=2), encoding="utf-8"
        )

    def get_conflicts(self, extra_files: Iterable[str] = ()) -> list[Conflict]:
        """Active conflicts from the main file and any extra files.

        When expired conflicts were dropped, the main file is rewritten with
        the active ones.
        """
        conflicts = self.read()
        for name in extra_files:
            conflicts.extend(self.read(name))
        active = remove_expired(conflicts)
        if len(active) < len(conflicts):
            try:
                self.write(active)
            except OSError as err:
                log.error("Unable to remove expired conflicts: %s", err)
        return active

    def save_conflict(self, conflict: Conflict) -> None:
        """Append a conflict to the main file, dropping expired ones."""
        conflicts = remove_expired(self.read())
        conflicts.append(conflict)
        self.write(conflicts)