from __future__ import annotations

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)

DATA_DIR = Path(os.getenv("DECISION_DATA_DIR", "data"))


class StorageError(RuntimeError):
    """Raised when a snapshot cannot be read from or written to the store."""


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._values)


def slugify(name: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9_-]+", "-", name.strip()).strip("-")
    return cleaned.lower() or "snapshot"


class JsonFileStore(KeyValueStore):
    """Keeps each key in its own ``<slug>.json`` file under a data directory."""

    def __init__(self, directory: Path | str | None = None) -> None:
        self.directory = Path(directory) if directory is not None else DATA_DIR

    def ensure_data_dir(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{slugify(key)}.json"

    def keys(self) -> List[str]:
        if not self.directory.exists():
            return []
        return sorted(path.stem for path in self.directory.glob("*.json"))

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                return handle.read()
        except OSError as exc:
            raise StorageError(f"Could not read {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.ensure_data_dir()
            with path.open("w", encoding="utf-8") as handle:
                handle.write(value)
        except OSError as exc:
            raise StorageError(f"Could not write {path}: {exc}") from exc

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Could not delete {path}: {exc}") from exc


def save_snapshot(store: KeyValueStore, key: str, payload: dict) -> None:
    store.set(key, json.dumps(payload, indent=2))
    logger.debug("Saved snapshot %s", key)


def load_snapshot(store: KeyValueStore, key: str) -> dict | None:
    try:
        raw = store.get(key)
        if raw is None:
            return None
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Failed to parse saved snapshot %s: %s", key, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring saved snapshot %s: expected an object, got %s", key, type(data).__name__)
        return None
    logger.debug("Loaded snapshot %s", key)
    return data
