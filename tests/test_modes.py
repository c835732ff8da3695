from __future__ import annotations

import random

import pytest

from merge2048.modes import (
    MODES,
    Mode,
    ModeId,
    PowerOfTwoRule,
    SpawnOption,
    draw_spawn_value,
    get_mode,
    list_modes,
)
from merge2048.sequences import FIBONACCI


def test_registry_lists_modes_in_table_order() -> None:
    assert [m.id for m in list_modes()] == [ModeId.classic, ModeId.timed, ModeId.fibonacci, ModeId.prime]
    assert set(MODES) == set(ModeId)


def test_get_mode_accepts_plain_strings() -> None:
    timed = get_mode("timed")
    assert timed.id == ModeId.timed
    assert timed.timer_seconds == 120
    assert get_mode(ModeId.classic).timer_seconds is None


def test_get_mode_unknown_raises() -> None:
    with pytest.raises(ValueError) as e:
        get_mode("hexagonal")
    assert "Unknown mode" in str(e.value)


def test_spawn_distribution_must_sum_to_one() -> None:
    with pytest.raises(ValueError) as e:
        Mode(
            id=ModeId.classic,
            label="Broken",
            description="",
            spawn=(SpawnOption(2, 0.5), SpawnOption(4, 0.2)),
            rule=PowerOfTwoRule(),
        )
    assert "expected 1.0" in str(e.value)


def test_classic_rules(classic: Mode) -> None:
    assert classic.can_merge(2, 2)
    assert classic.can_merge(1024, 1024)
    assert not classic.can_merge(0, 0)
    assert not classic.can_merge(2, 4)
    assert classic.merge_result(8, 8) == 16


def test_timed_uses_classic_rules() -> None:
    timed = get_mode(ModeId.timed)
    assert timed.can_merge(4, 4)
    assert timed.merge_result(4, 4) == 8
    assert timed.spawn == get_mode(ModeId.classic).spawn


def test_fibonacci_merges(fibonacci: Mode) -> None:
    assert fibonacci.merge_result(1, 1) == 2
    assert fibonacci.merge_result(3, 5) == 8
    assert fibonacci.merge_result(5, 8) == 13
    assert fibonacci.merge_result(8, 5) == 13
    assert fibonacci.merge_result(1, 2) == 3


def test_fibonacci_one_plus_one_ignores_sequence_length(fibonacci: Mode) -> None:
    FIBONACCI.extend(10**9)
    assert fibonacci.can_merge(1, 1)
    assert fibonacci.merge_result(1, 1) == 2


def test_fibonacci_predicate(fibonacci: Mode) -> None:
    assert fibonacci.can_merge(1, 2)
    assert fibonacci.can_merge(13, 21)
    assert not fibonacci.can_merge(3, 8)
    assert not fibonacci.can_merge(4, 5)
    assert not fibonacci.can_merge(2, 2)
    assert not fibonacci.can_merge(1, 0)
    assert not fibonacci.can_merge(0, 1)


def test_prime_merges(prime: Mode) -> None:
    assert prime.can_merge(2, 2)
    assert prime.merge_result(2, 2) == 3
    assert prime.can_merge(2, 3)
    assert prime.merge_result(2, 3) == 5
    assert prime.can_merge(3, 5)
    assert prime.merge_result(3, 5) == 7


def test_prime_rejects_non_consecutive_and_non_prime(prime: Mode) -> None:
    assert not prime.can_merge(3, 7)
    assert not prime.can_merge(3, 3)
    assert not prime.can_merge(4, 4)
    assert not prime.can_merge(9, 11)
    assert not prime.can_merge(0, 2)


@pytest.mark.parametrize(("roll", "expected"), [(0.0, 2), (0.5, 2), (0.9, 2), (0.9000001, 4), (0.999999, 4)])
def test_draw_spawn_value_walks_cumulative_mass(roll: float, expected: int) -> None:
    assert draw_spawn_value(get_mode(ModeId.classic).spawn, roll=roll) == expected


def test_draw_spawn_value_falls_back_to_last_entry() -> None:
    options = (SpawnOption(1, 0.3), SpawnOption(2, 0.3))
    assert draw_spawn_value(options, roll=0.99) == 2


def test_spawn_values_come_from_the_distribution(fibonacci: Mode, prime: Mode) -> None:
    rng = random.Random(7)
    assert {fibonacci.spawn_value(rng) for _ in range(200)} == {1, 2}
    assert {prime.spawn_value(rng) for _ in range(200)} == {2, 3}
