from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from merge2048.session import Session


logger = logging.getLogger(__name__)


class Countdown:
    """Whole-second countdown owned by one session.

    Once cancelled or expired it never ticks again, so a timer callback that
    outlives its session is harmless.
    """

    def __init__(self, seconds: int) -> None:
        if seconds <= 0:
            raise ValueError("Countdown needs a positive duration")
        self.duration = seconds
        self.remaining = seconds
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def expired(self) -> bool:
        return self.remaining <= 0

    @property
    def running(self) -> bool:
        return not self._cancelled and not self.expired

    def cancel(self) -> None:
        self._cancelled = True

    def tick(self) -> bool:
        """Advance one second. Returns True if this tick made the countdown expire."""

        if not self.running:
            return False
        self.remaining -= 1
        return self.expired


async def drive_countdown(
    session: "Session",
    *,
    on_tick: Callable[["Session"], Awaitable[None]] | None = None,
    interval: float = 1.0,
) -> None:
    """Tick `session` every `interval` seconds until its countdown stops running.

    The session is captured, not looked up, so replacing the active session
    cannot redirect ticks to the new one.
    """

    countdown = session.countdown
    if countdown is None:
        return

    while countdown.running:
        await asyncio.sleep(interval)
        if not countdown.running:
            break
        session.tick()
        if on_tick is not None:
            await on_tick(session)

    logger.debug("Countdown for session %s stopped (remaining=%s)", session.session_id, countdown.remaining)


class CountdownScheduler:
    """Keeps at most one countdown driver task alive."""

    def __init__(self, *, interval: float = 1.0) -> None:
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    def start(
        self,
        session: "Session",
        *,
        on_tick: Callable[["Session"], Awaitable[None]] | None = None,
    ) -> asyncio.Task[None] | None:
        self.stop()
        if session.countdown is None:
            return None
        self._task = asyncio.create_task(drive_countdown(session, on_tick=on_tick, interval=self.interval))
        return self._task

    def stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
