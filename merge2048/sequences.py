from __future__ import annotations

from abc import ABC, abstractmethod


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    d = 3
    while d * d <= n:
        if n % d == 0:
            return False
        d += 2
    return True


def next_prime_after(n: int) -> int:
    """Smallest prime strictly greater than `n` (trial division, fine for tile-sized values)."""

    candidate = max(n + 1, 2)
    while not is_prime(candidate):
        candidate += 1
    return candidate


class IntegerSequence(ABC):
    """Append-only, strictly increasing integer sequence grown on demand.

    Contract:
      - starts from a fixed seed and only ever appends, so an element's index
        never changes once it has been produced.
      - `extend(upper_bound)` grows until the last element is >= upper_bound.
      - lookups extend first, so membership is always decided.
    """

    seed: tuple[int, ...] = ()

    def __init__(self) -> None:
        self._values: list[int] = list(self.seed)
        self._positions: dict[int, int] = {v: i for i, v in enumerate(self._values)}

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, idx: int) -> int:
        return self._values[idx]

    @property
    def last(self) -> int:
        return self._values[-1]

    @abstractmethod
    def _next_value(self) -> int:
        raise NotImplementedError

    def append_next(self) -> int:
        value = self._next_value()
        self._positions[value] = len(self._values)
        self._values.append(value)
        return value

    def extend(self, upper_bound: int) -> None:
        while self.last < upper_bound:
            self.append_next()

    def index_of(self, n: int) -> int | None:
        self.extend(n)
        return self._positions.get(n)

    def successor_of(self, n: int) -> int | None:
        idx = self.index_of(n)
        if idx is None:
            return None
        while idx + 1 >= len(self._values):
            self.append_next()
        return self._values[idx + 1]

    def are_adjacent(self, a: int, b: int) -> bool:
        """True if `a` and `b` are both members and sit next to each other."""

        idx_a = self.index_of(a)
        idx_b = self.index_of(b)
        if idx_a is None or idx_b is None:
            return False
        return abs(idx_a - idx_b) == 1


class FibonacciSequence(IntegerSequence):
    seed = (1, 2)

    def _next_value(self) -> int:
        return self._values[-1] + self._values[-2]


class PrimeSequence(IntegerSequence):
    seed = (2, 3)

    def _next_value(self) -> int:
        return next_prime_after(self._values[-1])


# Process-wide caches; every session and mode shares them.
FIBONACCI = FibonacciSequence()
PRIMES = PrimeSequence()
