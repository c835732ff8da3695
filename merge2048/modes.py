from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from merge2048.sequences import FIBONACCI, PRIMES, is_prime, next_prime_after


class ModeId(str, Enum):
    classic = "classic"
    timed = "timed"
    fibonacci = "fibonacci"
    prime = "prime"


DEFAULT_MODE = ModeId.classic


@dataclass(frozen=True, slots=True)
class SpawnOption:
    value: int
    prob: float


class MergeRule(ABC):
    """Decides which neighbouring tiles combine and what they become."""

    @abstractmethod
    def can_merge(self, a: int, b: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def merge_result(self, a: int, b: int) -> int:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PowerOfTwoRule(MergeRule):
    def can_merge(self, a: int, b: int) -> bool:
        return a != 0 and a == b

    def merge_result(self, a: int, b: int) -> int:
        return a + b


@dataclass(frozen=True, slots=True)
class FibonacciRule(MergeRule):
    """Consecutive Fibonacci numbers merge into the next one; 1+1 is allowed to start a chain."""

    def can_merge(self, a: int, b: int) -> bool:
        if not a or not b:
            return False
        if a == 1 and b == 1:
            return True
        return FIBONACCI.are_adjacent(a, b)

    def merge_result(self, a: int, b: int) -> int:
        if a == 1 and b == 1:
            return 2
        successor = FIBONACCI.successor_of(max(a, b))
        if successor is None:
            raise ValueError(f"{max(a, b)} is not a Fibonacci tile")
        return successor


@dataclass(frozen=True, slots=True)
class PrimeRule(MergeRule):
    """Consecutive primes merge into the next prime; 2+2 -> 3 bootstraps the chain."""

    def can_merge(self, a: int, b: int) -> bool:
        if not a or not b:
            return False
        if a == 2 and b == 2:
            return True
        if not is_prime(a) or not is_prime(b):
            return False
        return PRIMES.are_adjacent(a, b)

    def merge_result(self, a: int, b: int) -> int:
        if a == 2 and b == 2:
            return 3
        return next_prime_after(max(a, b))


@dataclass(frozen=True, slots=True)
class Mode:
    id: ModeId
    label: str
    description: str
    spawn: tuple[SpawnOption, ...]
    rule: MergeRule
    timer_seconds: int | None = None

    def __post_init__(self) -> None:
        if not self.spawn:
            raise ValueError(f"Mode '{self.id.value}' has an empty spawn distribution")
        total = sum(o.prob for o in self.spawn)
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Mode '{self.id.value}' spawn probabilities sum to {total}, expected 1.0")

    def can_merge(self, a: int, b: int) -> bool:
        return self.rule.can_merge(a, b)

    def merge_result(self, a: int, b: int) -> int:
        return self.rule.merge_result(a, b)

    def spawn_value(self, rng: random.Random) -> int:
        return draw_spawn_value(self.spawn, roll=rng.random())


def draw_spawn_value(options: tuple[SpawnOption, ...], *, roll: float) -> int:
    """Walk the distribution until the cumulative mass reaches `roll` (in [0, 1))."""

    cumulative = 0.0
    for option in options:
        cumulative += option.prob
        if roll <= cumulative:
            return option.value
    # Rounding can leave the total a hair under 1.0.
    return options[-1].value


_CLASSIC_SPAWN = (SpawnOption(2, 0.9), SpawnOption(4, 0.1))

MODES: dict[ModeId, Mode] = {
    ModeId.classic: Mode(
        id=ModeId.classic,
        label="Classic",
        description="Classic 2048 rules with 2/4 tiles.",
        spawn=_CLASSIC_SPAWN,
        rule=PowerOfTwoRule(),
    ),
    ModeId.timed: Mode(
        id=ModeId.timed,
        label="Timed",
        description="Classic rules against a countdown.",
        spawn=_CLASSIC_SPAWN,
        rule=PowerOfTwoRule(),
        timer_seconds=120,
    ),
    ModeId.fibonacci: Mode(
        id=ModeId.fibonacci,
        label="Fibonacci",
        description="Only consecutive Fibonacci numbers merge (1+1 allowed).",
        spawn=(SpawnOption(1, 0.75), SpawnOption(2, 0.25)),
        rule=FibonacciRule(),
    ),
    ModeId.prime: Mode(
        id=ModeId.prime,
        label="Primes",
        description="Only consecutive primes merge (2+2 -> 3 to get started).",
        spawn=(SpawnOption(2, 0.7), SpawnOption(3, 0.3)),
        rule=PrimeRule(),
    ),
}


def get_mode(mode_id: ModeId | str) -> Mode:
    try:
        key = ModeId(mode_id) if not isinstance(mode_id, ModeId) else mode_id
    except ValueError as e:
        raise ValueError(f"Unknown mode: {mode_id}") from e
    return MODES[key]


def list_modes() -> list[Mode]:
    return list(MODES.values())
