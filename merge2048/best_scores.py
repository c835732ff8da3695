from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod

import redis

from merge2048.modes import ModeId


logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "variant"


def get_key_namespace() -> str:
    return os.environ.get("MERGE2048_NAMESPACE", DEFAULT_NAMESPACE)


def best_score_key(*, namespace: str, mode_id: ModeId | str) -> str:
    mode = mode_id.value if isinstance(mode_id, ModeId) else mode_id
    return f"{namespace}-best-{mode}"


class BestScoreStore(ABC):
    """Port for per-mode best scores.

    `load` never fails (unknown/unreadable -> 0); `save` reports whether the value was persisted.
    """

    @abstractmethod
    def load(self, mode_id: ModeId | str) -> int:
        raise NotImplementedError

    @abstractmethod
    def save(self, mode_id: ModeId | str, value: int) -> bool:
        raise NotImplementedError


class RedisBestScoreStore(BestScoreStore):
    def __init__(self, *, r: redis.Redis, namespace: str | None = None) -> None:
        self.r = r
        self.namespace = namespace if namespace is not None else get_key_namespace()

    def _key(self, mode_id: ModeId | str) -> str:
        return best_score_key(namespace=self.namespace, mode_id=mode_id)

    def load(self, mode_id: ModeId | str) -> int:
        key = self._key(mode_id)
        try:
            raw = self.r.get(key)
        except redis.RedisError as e:
            logger.warning("Best score unavailable for %s: %s", key, e)
            return 0
        if raw is None:
            return 0
        try:
            value = int(raw)
        except ValueError:
            logger.warning("Ignoring unparsable best score %r at %s", raw, key)
            return 0
        return max(value, 0)

    def save(self, mode_id: ModeId | str, value: int) -> bool:
        key = self._key(mode_id)
        try:
            self.r.set(key, str(int(value)))
        except redis.RedisError as e:
            logger.warning("Best score for %s not persisted: %s", key, e)
            return False
        return True
