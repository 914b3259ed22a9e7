from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable

from models import MAX_WEIGHT, MIN_WEIGHT, clamp_weight
from storage import KeyValueStore, load_snapshot, save_snapshot

logger = logging.getLogger(__name__)


def new_id(existing: Iterable[str] = ()) -> str:
    taken = set(existing)
    candidate = time.time_ns() // 1_000_000
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


class DecisionMode(ABC):
    id: str
    name: str
    description: str
    storage_key: str

    @abstractmethod
    def empty_state(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def state_from_dict(self, data: dict) -> Any:
        raise NotImplementedError


class DecisionSession:
    """Live state of one mode, mirrored to a key/value store.

    Every committed transition goes through :meth:`apply`, which replaces the
    state and writes the full snapshot before returning. Storage failures
    surface as :class:`storage.StorageError`.
    """

    def __init__(self, mode: DecisionMode, store: KeyValueStore) -> None:
        self.mode = mode
        self.store = store
        self.state = mode.empty_state()

    def load(self) -> Any:
        data = load_snapshot(self.store, self.mode.storage_key)
        if data is None:
            self.state = self.mode.empty_state()
            return self.state
        try:
            self.state = self.mode.state_from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Failed to load saved %s decision: %s", self.mode.id, exc)
            self.state = self.mode.empty_state()
        return self.state

    def save(self) -> None:
        save_snapshot(self.store, self.mode.storage_key, self.state.to_dict())

    def apply(self, transition: Callable[..., Any], *args: Any) -> Any:
        self.state = transition(self.state, *args)
        self.save()
        return self.state

    def clear_all(self) -> Any:
        self.state = self.mode.empty_state()
        self.store.delete(self.mode.storage_key)
        logger.debug("Cleared %s decision", self.mode.id)
        return self.state
