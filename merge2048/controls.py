"""Input translation: raw key codes and swipe vectors to move directions."""

from __future__ import annotations

from merge2048.grid import Direction


SWIPE_THRESHOLD = 20.0

KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowUp": Direction.up,
    "ArrowDown": Direction.down,
    "ArrowLeft": Direction.left,
    "ArrowRight": Direction.right,
}


class InvalidDirection(ValueError):
    pass


def parse_direction(value: Direction | str) -> Direction:
    if isinstance(value, Direction):
        return value
    try:
        return Direction(str(value).strip().lower())
    except ValueError as e:
        allowed = ",".join(d.value for d in Direction)
        raise InvalidDirection(f"Invalid direction '{value}' (allowed: {allowed})") from e


def direction_for_key(key: str) -> Direction | None:
    return KEY_DIRECTIONS.get(key)


def direction_for_swipe(dx: float, dy: float, *, threshold: float = SWIPE_THRESHOLD) -> Direction | None:
    """Dominant axis wins; screen coordinates, so positive dy is a swipe down."""

    abs_x = abs(dx)
    abs_y = abs(dy)
    if max(abs_x, abs_y) < threshold:
        return None
    if abs_x > abs_y:
        return Direction.right if dx > 0 else Direction.left
    return Direction.down if dy > 0 else Direction.up
