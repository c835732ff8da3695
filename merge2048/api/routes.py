from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from merge2048.api.deps import get_game_controller
from merge2048.api.models import (
    BestScoreResponse,
    KeyRequest,
    ModeInfo,
    ModeListResponse,
    MoveRequest,
    MoveResponse,
    NewGameRequest,
    SessionState,
    SwipeRequest,
    SwitchModeRequest,
    UndoResponse,
)
from merge2048.controller import GameController
from merge2048.controls import direction_for_key, direction_for_swipe
from merge2048.countdown import CountdownScheduler
from merge2048.grid import Direction
from merge2048.modes import ModeId, list_modes
from merge2048.session import MoveResult, Session
from merge2048.websocket_hub import hub

logger = logging.getLogger(__name__)

router = APIRouter()

countdowns = CountdownScheduler()


def _require_session(controller: GameController) -> Session:
    try:
        return controller.require_session()
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


async def _publish(session: Session) -> SessionState:
    state = SessionState.from_view(session.view())
    await hub.broadcast({"type": "session_updated", "state": state.model_dump(mode="json")})
    return state


async def _on_countdown_tick(session: Session) -> None:
    await _publish(session)


async def _start_session(session: Session) -> SessionState:
    countdowns.start(session, on_tick=_on_countdown_tick)
    return await _publish(session)


async def _apply_move(session: Session, direction: Direction | None) -> MoveResponse:
    if direction is None:
        result = MoveResult(moved=False)
    else:
        result = session.move(direction)
    if session.terminal:
        countdowns.stop()
    state = await _publish(session)
    return MoveResponse(moved=result.moved, gained=result.gained, state=state)


@router.websocket("/ws/session")
async def session_updates_ws(websocket: WebSocket) -> None:
    await hub.connect(websocket)

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(websocket)
    except Exception:
        await hub.disconnect(websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/modes", response_model=ModeListResponse)
async def list_modes_route() -> ModeListResponse:
    return ModeListResponse(modes=[ModeInfo.from_mode(m) for m in list_modes()])


@router.post("/session", response_model=SessionState, status_code=status.HTTP_201_CREATED)
async def new_game_route(
    payload: NewGameRequest | None = None,
    controller: GameController = Depends(get_game_controller),
) -> SessionState:
    try:
        session = controller.new_game(payload.mode if payload is not None else None)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return await _start_session(session)


@router.get("/session", response_model=SessionState)
async def get_session_route(controller: GameController = Depends(get_game_controller)) -> SessionState:
    return SessionState.from_view(_require_session(controller).view())


@router.post("/session/mode", response_model=SessionState)
async def switch_mode_route(
    payload: SwitchModeRequest,
    controller: GameController = Depends(get_game_controller),
) -> SessionState:
    try:
        session = controller.switch_mode(payload.mode)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return await _start_session(session)


@router.post("/session/move", response_model=MoveResponse)
async def move_route(payload: MoveRequest, controller: GameController = Depends(get_game_controller)) -> MoveResponse:
    return await _apply_move(_require_session(controller), payload.direction)


@router.post("/session/key", response_model=MoveResponse)
async def key_route(payload: KeyRequest, controller: GameController = Depends(get_game_controller)) -> MoveResponse:
    session = _require_session(controller)
    direction = direction_for_key(payload.key)
    if direction is None:
        logger.debug("Ignoring unmapped key %r", payload.key)
    return await _apply_move(session, direction)


@router.post("/session/swipe", response_model=MoveResponse)
async def swipe_route(payload: SwipeRequest, controller: GameController = Depends(get_game_controller)) -> MoveResponse:
    session = _require_session(controller)
    return await _apply_move(session, direction_for_swipe(payload.dx, payload.dy))


@router.post("/session/undo", response_model=UndoResponse)
async def undo_route(controller: GameController = Depends(get_game_controller)) -> UndoResponse:
    session = _require_session(controller)
    undone = session.undo()
    state = await _publish(session)
    return UndoResponse(undone=undone, state=state)


@router.get("/best/{mode}", response_model=BestScoreResponse)
async def best_score_route(mode: ModeId, controller: GameController = Depends(get_game_controller)) -> BestScoreResponse:
    return BestScoreResponse(mode=mode, best_score=controller.best_score_for(mode))
