from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError as PydanticValidationError

from group_chat.api.deps import ConnectionsDep, RegistryDep
from group_chat.application.dto.session import JoinProfileDTO, SendMessageDTO
from group_chat.config import settings
from group_chat.domain.value_objects.enums import InboundEvent, OutboundEvent
from group_chat.infrastructure.ws.manager import ConnectionManager
from group_chat.infrastructure.ws.protocol import (
    JoinPayload,
    SendMessagePayload,
    WsInbound,
    WsOutbound,
    describe_errors,
)
from group_chat.log_config import correlation_id_ctx
from group_chat.services.session_service import ChatSession

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])


@router.websocket("/ws/chat")
async def ws_chat(
    websocket: WebSocket,
    registry: RegistryDep,
    manager: ConnectionsDep,
) -> None:
    connection_id = await manager.connect(websocket)
    token = correlation_id_ctx.set(connection_id)
    session = ChatSession(connection_id, registry, manager)

    heartbeat_task = asyncio.create_task(
        _heartbeat(websocket), name=f"ws-heartbeat-{connection_id}",
    )
    try:
        await _read_loop(websocket, session, manager)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error for %s", connection_id)
    finally:
        heartbeat_task.cancel()
        # The only close notification for this connection.
        manager.disconnect(connection_id)
        await session.disconnect()
        correlation_id_ctx.reset(token)


async def _heartbeat(ws: WebSocket) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    try:
        while True:
            await asyncio.sleep(interval)
            await ws.send_text(WsOutbound(type=OutboundEvent.PONG, data={}).model_dump_json())
    except asyncio.CancelledError:
        pass
    except Exception:
        logger.debug("Heartbeat stopped", exc_info=True)


async def _read_loop(ws: WebSocket, session: ChatSession, manager: ConnectionManager) -> None:
    while True:
        message = await ws.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", 1000))

        raw = message.get("text")
        if raw is None:
            # Binary frames are not part of the protocol; the connection stays open.
            await manager.send(
                session.connection_id, OutboundEvent.ERROR, {"code": "invalid_payload"},
            )
            continue

        try:
            msg = WsInbound.model_validate_json(raw)
        except PydanticValidationError:
            await manager.send(
                session.connection_id, OutboundEvent.ERROR, {"code": "invalid_payload"},
            )
            continue

        await _dispatch(msg, session, manager)


async def _dispatch(msg: WsInbound, session: ChatSession, manager: ConnectionManager) -> None:
    if msg.type == InboundEvent.JOIN:
        try:
            join = JoinPayload.model_validate(msg.data)
        except PydanticValidationError as exc:
            await session.reject(OutboundEvent.JOIN_REJECTED, describe_errors(exc))
            return
        await session.join(
            JoinProfileDTO(
                name=join.name,
                gender_label=join.gender_label,
                region_label=join.region_label,
                avatar_ref=join.avatar_ref,
            )
        )

    elif msg.type == InboundEvent.SEND_MESSAGE:
        try:
            payload = SendMessagePayload.model_validate(msg.data)
        except PydanticValidationError as exc:
            await session.reject(OutboundEvent.SEND_REJECTED, describe_errors(exc))
            return
        await session.send_message(SendMessageDTO(text=payload.text, timestamp=payload.timestamp))

    elif msg.type == InboundEvent.TYPING_START:
        await session.typing_start()

    elif msg.type == InboundEvent.TYPING_STOP:
        await session.typing_stop()

    elif msg.type == InboundEvent.PING:
        await manager.send(session.connection_id, OutboundEvent.PONG, {})

    else:
        await manager.send(
            session.connection_id,
            OutboundEvent.ERROR,
            {"code": "unknown_type", "type": msg.type},
        )
