"""WebSocket endpoint for real-time post updates."""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from socialapi.services.realtime import POSTS_CHANNEL, RealtimeService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/ws", tags=["websocket"])

PING_INTERVAL_SECONDS = 30


@router.websocket("/posts")
async def websocket_posts(websocket: WebSocket) -> None:
    """Push every post create/update/delete to the connected client.

    The feed is public, so no token is required. Messages have the shape
    ``{"action": "create" | "update" | "delete", "post": ...}``.
    """
    realtime_service = RealtimeService()
    await websocket.accept()
    logger.info("WebSocket connected to posts feed")

    async def handle_messages() -> None:
        """Receive messages from Redis and forward to WebSocket."""
        async for message in realtime_service.subscribe(POSTS_CHANNEL):
            try:
                await websocket.send_json(message)
            except WebSocketDisconnect:
                break
            except Exception as e:
                logger.error(f"Error sending WebSocket message: {e}")
                break

    async def handle_ping() -> None:
        """Send periodic pings to keep connection alive."""
        while True:
            await asyncio.sleep(PING_INTERVAL_SECONDS)
            try:
                await websocket.send_json({"type": "ping"})
            except Exception:
                break

    async def handle_client() -> None:
        """Drain incoming messages (pong responses) until the client leaves."""
        while True:
            try:
                await websocket.receive_json()
            except WebSocketDisconnect:
                break
            except Exception:
                break

    tasks = [
        asyncio.create_task(handle_messages()),
        asyncio.create_task(handle_ping()),
        asyncio.create_task(handle_client()),
    ]
    try:
        # Whichever side stops first ends the session
        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    except Exception as e:
        logger.error(f"WebSocket error: {e}", exc_info=True)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await realtime_service.cleanup()
        logger.info("WebSocket disconnected from posts feed")
