from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from merge2048.grid import Board


HISTORY_LIMIT = 10


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    rows: tuple[tuple[int, ...], ...]
    score: int

    def board(self) -> Board:
        return [list(row) for row in self.rows]


class HistoryStack:
    """Bounded undo stack; pushing past the limit drops the oldest snapshot."""

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        self._items: deque[HistorySnapshot] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def limit(self) -> int:
        return self._items.maxlen or 0

    def push(self, board: Board, score: int) -> None:
        self._items.append(HistorySnapshot(rows=tuple(tuple(row) for row in board), score=score))

    def pop(self) -> HistorySnapshot | None:
        if not self._items:
            return None
        return self._items.pop()

    def clear(self) -> None:
        self._items.clear()
