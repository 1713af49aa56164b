"""Persistence backends holding the whole record collection plus the serial counter.

A backend stores one JSON document shaped like
``{"records": [...], "currentRecordId": 7}``. Unreadable or corrupt data is
reported as absent so the store can start from an empty collection.
"""
from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

State = Dict[str, Any]


class StorageBackend(Protocol):
    def load(self) -> Optional[State]:
        ...

    def save(self, state: State) -> None:
        ...


class MemoryBackend:
    """Keeps the saved state in process; useful for tests and previews."""

    def __init__(self, initial: Optional[State] = None) -> None:
        self._state = copy.deepcopy(initial) if initial is not None else None
        self.save_count = 0

    def load(self) -> Optional[State]:
        return copy.deepcopy(self._state) if self._state is not None else None

    def save(self, state: State) -> None:
        self._state = copy.deepcopy(state)
        self.save_count += 1


class JsonFileBackend:
    """Stores the state as a UTF-8 JSON file, overwritten in full on each save."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Optional[State]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable record store %s: %s", self.path, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring record store %s: expected a JSON object", self.path)
            return None
        return data

    def save(self, state: State) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(self.path.name + ".tmp")
        temp_path.write_text(json.dumps(state, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(temp_path, self.path)
