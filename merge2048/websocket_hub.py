from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket


logger = logging.getLogger(__name__)


class SessionWebSocketHub:
    """In-process WebSocket fan-out for the render payload.

    Contract:
      - renderers subscribe with `connect(websocket)`.
      - `broadcast(payload)` pushes a JSON-serializable dict to every live
        connection; connections that fail to receive are dropped.

    There is only ever one active session, so there is a single channel.
    """

    def __init__(self) -> None:
        self._conns: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._conns.add(websocket)

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._conns.discard(websocket)

    async def broadcast(self, payload: dict[str, object]) -> None:
        async with self._lock:
            conns = list(self._conns)

        if not conns:
            return

        dead: list[WebSocket] = []
        for ws in conns:
            try:
                await ws.send_json(payload)
            except Exception:
                dead.append(ws)

        if dead:
            logger.debug("Dropping %d dead websocket(s)", len(dead))
            async with self._lock:
                for ws in dead:
                    self._conns.discard(ws)


hub = SessionWebSocketHub()
