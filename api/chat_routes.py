"""FastAPI routes for the floating zone chat assistant."""
from __future__ import annotations

import threading
from typing import Annotated, Dict, List

from fastapi import APIRouter, HTTPException, Path

from api.schemas import ChatEventResp, OpenReq, PositionReq, SendReq, ZoneReq
from zone_chat import ZONES, ChatBusyError, ChatPosition, ChatSession, ChatState, Viewport
from zone_chat.zones import ZoneInfo


router = APIRouter(prefix="/api")

ClientId = Annotated[str, Path(pattern=r"^[A-Za-z0-9_-]{1,64}$")]

_SESSIONS: Dict[str, ChatSession] = {}
_SESSIONS_GUARD = threading.Lock()


def session_for(client_id: str) -> ChatSession:
    """Return the live session for ``client_id``, rehydrating it from storage on first use."""

    with _SESSIONS_GUARD:
        session = _SESSIONS.get(client_id)
        if session is None:
            session = ChatSession.for_client(client_id)
            _SESSIONS[client_id] = session
    return session


def reset_sessions() -> None:
    with _SESSIONS_GUARD:
        _SESSIONS.clear()


def _added(*messages) -> ChatEventResp:
    return ChatEventResp(added=[message for message in messages if message is not None])


@router.get("/zones", response_model=List[ZoneInfo])
def zones() -> List[ZoneInfo]:
    return list(ZONES)


@router.get("/zone-chat/{client_id}", response_model=ChatState)
def get_state(client_id: ClientId) -> ChatState:
    return session_for(client_id).state()


@router.post("/zone-chat/{client_id}/open", response_model=ChatEventResp)
def set_open(client_id: ClientId, req: OpenReq) -> ChatEventResp:
    return _added(session_for(client_id).set_open(req.open))


@router.post("/zone-chat/{client_id}/zone", response_model=ChatEventResp)
def set_zone(client_id: ClientId, req: ZoneReq) -> ChatEventResp:
    session = session_for(client_id)
    try:
        message = session.set_zone(req.zone_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"unknown zone: {req.zone_id}") from exc
    return _added(message)


@router.post("/zone-chat/{client_id}/position", response_model=ChatPosition)
def set_position(client_id: ClientId, req: PositionReq) -> ChatPosition:
    session = session_for(client_id)
    if req.viewport_width is not None and req.viewport_height is not None:
        session.set_viewport(Viewport(width=req.viewport_width, height=req.viewport_height))
    return session.set_position(ChatPosition(x=req.x, y=req.y))


@router.post("/zone-chat/{client_id}/messages", response_model=ChatEventResp)
def send(client_id: ClientId, req: SendReq) -> ChatEventResp:
    session = session_for(client_id)
    try:
        added = session.send(req.content)
    except ChatBusyError as exc:
        raise HTTPException(status_code=409, detail="reply already in progress") from exc
    return ChatEventResp(added=added)


@router.post("/zone-chat/{client_id}/quick-actions/{action_id}", response_model=ChatEventResp)
def quick_action(client_id: ClientId, action_id: str) -> ChatEventResp:
    try:
        messages = session_for(client_id).quick_action(action_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"unknown quick action: {action_id}") from exc
    return ChatEventResp(added=messages)


@router.delete("/zone-chat/{client_id}/messages", response_model=ChatEventResp)
def clear(client_id: ClientId) -> ChatEventResp:
    session_for(client_id).clear()
    return ChatEventResp()
