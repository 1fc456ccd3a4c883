"""Real-time broadcast of post changes using Redis pub/sub."""

import json
import logging
from collections.abc import AsyncIterator
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import redis
import redis.asyncio as aioredis

from socialapi.config import get_settings

if TYPE_CHECKING:
    from redis.asyncio.client import PubSub

logger = logging.getLogger(__name__)
settings = get_settings()

POSTS_CHANNEL = "posts"


class PostAction(StrEnum):
    """Actions broadcast on the posts channel."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Synchronous Redis client for use in request handlers
_sync_redis: redis.Redis | None = None


def get_sync_redis() -> redis.Redis:
    """Get synchronous Redis client for publishing from request handlers."""
    global _sync_redis
    if _sync_redis is None:
        _sync_redis = redis.from_url(settings.redis_url)
    return _sync_redis


def publish_post_event(action: PostAction, post: Any) -> None:
    """Publish a post change to every connected client.

    Called by the feed service after a mutation is committed. Delivery is
    best effort: a client that is not connected misses the event.

    Args:
        action: create, update or delete
        post: Serialized post for create/update, the post id for delete
    """
    try:
        redis_client = get_sync_redis()
        message = {"action": action, "post": post}
        redis_client.publish(POSTS_CHANNEL, json.dumps(message, default=str))
        logger.debug(f"Published {action} to {POSTS_CHANNEL}")
    except Exception as e:
        # Don't fail the request if pub/sub fails
        logger.error(f"Failed to publish post event: {e}")


class RealtimeService:
    """Async Redis pub/sub service for WebSocket connections."""

    def __init__(self) -> None:
        self._redis: aioredis.Redis | None = None
        self._pubsub: PubSub | None = None

    async def _get_redis(self) -> aioredis.Redis:
        if self._redis is None:
            self._redis = aioredis.from_url(settings.redis_url)
        return self._redis

    async def subscribe(self, channel: str = POSTS_CHANNEL) -> AsyncIterator[dict]:
        """Subscribe to a Redis channel and yield messages."""
        redis_conn = await self._get_redis()
        self._pubsub = redis_conn.pubsub()
        await self._pubsub.subscribe(channel)

        try:
            async for message in self._pubsub.listen():
                if message["type"] == "message":
                    try:
                        data = json.loads(message["data"])
                        yield data
                    except json.JSONDecodeError:
                        logger.warning(f"Invalid JSON in pub/sub message: {message['data']}")
        finally:
            if self._pubsub:
                await self._pubsub.unsubscribe(channel)

    async def cleanup(self) -> None:
        """Clean up Redis connections."""
        if self._pubsub:
            await self._pubsub.close()
        if self._redis:
            await self._redis.close()
