import asyncio

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from loguru import logger

from songlink.domain.dispatch import ConnectionRegistry
from songlink.domain.exceptions import AccountNotFoundError

from ..deps import get_registry

router = APIRouter()


@router.websocket("/ws")
@router.websocket("/")
async def spectator_websocket(
    websocket: WebSocket,
    registry: ConnectionRegistry = Depends(get_registry),
):
    """Spectator channel. Connect with ?username=<name>; receives play commands."""
    username = websocket.query_params.get("username")
    logger.info(f"WebSocket connection for username: {username}")

    try:
        instance = await asyncio.to_thread(registry.register, username, websocket)
    except AccountNotFoundError:
        # Refuse before accepting; unknown identities never get a slot
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    try:
        await websocket.accept()

        # Server -> client only; inbound frames are read to detect disconnects
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            logger.debug(f"Ignoring message from {username}")

    except WebSocketDisconnect:
        pass
    finally:
        registry.unregister(username, instance)
