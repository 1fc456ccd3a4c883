"""Tests for real-time post broadcasting."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from socialapi.services.realtime import (
    POSTS_CHANNEL,
    PostAction,
    RealtimeService,
    get_sync_redis,
    publish_post_event,
)


class TestPostAction:
    def test_actions_exist(self):
        """Verify all post actions are defined."""
        assert PostAction.CREATE == "create"
        assert PostAction.UPDATE == "update"
        assert PostAction.DELETE == "delete"


class TestGetSyncRedis:
    """Tests for get_sync_redis function."""

    def test_creates_redis_client(self):
        import socialapi.services.realtime as realtime_module

        realtime_module._sync_redis = None

        with patch("socialapi.services.realtime.redis.from_url") as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            result = get_sync_redis()

            assert result == mock_client
            mock_from_url.assert_called_once()

    def test_reuses_existing_client(self, published):
        with patch("socialapi.services.realtime.redis.from_url") as mock_from_url:
            result = get_sync_redis()

            assert result == published
            mock_from_url.assert_not_called()


class TestPublishPostEvent:
    def test_publishes_to_posts_channel(self, published):
        """Events go to the single posts channel as {action, post}."""
        publish_post_event(PostAction.CREATE, {"id": 1, "title": "Hello"})

        published.publish.assert_called_once()
        channel, payload = published.publish.call_args[0]
        assert channel == POSTS_CHANNEL
        assert json.loads(payload) == {"action": "create", "post": {"id": 1, "title": "Hello"}}

    def test_delete_carries_only_the_id(self, published):
        publish_post_event(PostAction.DELETE, 42)

        message = json.loads(published.publish.call_args[0][1])
        assert message == {"action": "delete", "post": 42}

    def test_handles_redis_error_gracefully(self, published):
        """Redis errors don't propagate to the caller."""
        published.publish.side_effect = Exception("Redis connection failed")

        publish_post_event(PostAction.UPDATE, {"id": 1})


def _service_with_messages(*messages):
    service = RealtimeService()
    mock_redis = MagicMock()
    mock_pubsub = MagicMock()

    async def mock_listen():
        for message in messages:
            yield message

    mock_pubsub.listen = mock_listen
    mock_pubsub.subscribe = AsyncMock()
    mock_pubsub.unsubscribe = AsyncMock()
    mock_redis.pubsub.return_value = mock_pubsub
    service._redis = mock_redis
    return service, mock_pubsub


class TestRealtimeService:
    def test_init(self):
        service = RealtimeService()
        assert service._redis is None
        assert service._pubsub is None

    @pytest.mark.asyncio
    async def test_get_redis_creates_connection(self):
        service = RealtimeService()

        with patch("socialapi.services.realtime.aioredis.from_url") as mock_from_url:
            mock_redis = AsyncMock()
            mock_from_url.return_value = mock_redis

            result = await service._get_redis()

            assert result == mock_redis
            mock_from_url.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_closes_connections(self):
        service = RealtimeService()
        service._redis = AsyncMock()
        service._pubsub = AsyncMock()

        await service.cleanup()

        service._pubsub.close.assert_called_once()
        service._redis.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_handles_no_connections(self):
        await RealtimeService().cleanup()

    @pytest.mark.asyncio
    async def test_subscribe_defaults_to_posts_channel(self):
        """Confirmations and invalid JSON are skipped."""
        event = {"action": "create", "post": {"id": 1}}
        service, mock_pubsub = _service_with_messages(
            {"type": "subscribe", "data": 1},
            {"type": "message", "data": "not valid json"},
            {"type": "message", "data": json.dumps(event)},
        )

        messages = [message async for message in service.subscribe()]

        assert messages == [event]
        mock_pubsub.subscribe.assert_awaited_once_with(POSTS_CHANNEL)
        mock_pubsub.unsubscribe.assert_awaited_once_with(POSTS_CHANNEL)


class FakeRealtimeService:
    """Yields a single event, then idles like an open subscription."""

    event = {"action": "delete", "post": 7}

    def __init__(self):
        self.cleaned_up = False

    async def subscribe(self, channel=POSTS_CHANNEL):
        yield self.event
        await asyncio.Event().wait()

    async def cleanup(self):
        self.cleaned_up = True


class TestWebSocketEndpoint:
    def test_forwards_events_without_token(self, client):
        """The posts socket is public and forwards broadcast events."""
        with (
            patch("socialapi.api.websocket.RealtimeService", FakeRealtimeService),
            client.websocket_connect("/ws/posts") as websocket,
        ):
            assert websocket.receive_json() == FakeRealtimeService.event
