import redis.asyncio as redis
import json
import logging
from typing import Optional, Any, Dict
from ..config import settings

logger = logging.getLogger(__name__)


class RedisClient:
    def __init__(self):
        self.redis: Optional[redis.Redis] = None

    @property
    def enabled(self) -> bool:
        return bool(settings.redis_url)

    @property
    def connected(self) -> bool:
        return self.redis is not None

    async def connect(self):
        """Connect to Redis when a URL is configured"""
        if not self.enabled:
            logger.info("REDIS_URL not set, events will only be logged")
            return
        try:
            self.redis = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
                retry_on_timeout=True,
                socket_keepalive=True,
            )
            # Test connection
            await self.redis.ping()
            logger.info("Connected to Redis successfully")
        except Exception as e:
            self.redis = None
            logger.error(f"Failed to connect to Redis: {e}")
            raise

    async def disconnect(self):
        """Disconnect from Redis"""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def publish_event(self, channel: str, event_data: Dict[str, Any]) -> int:
        """Publish event to Redis channel; returns the receiver count"""
        if not self.connected:
            logger.debug(f"Redis not connected, dropped event on {channel}")
            return 0
        try:
            receivers = await self.redis.publish(channel, json.dumps(event_data, default=str))
            logger.info(f"Published event to {channel}: {event_data.get('event_type')}")
            return receivers
        except Exception as e:
            logger.error(f"Failed to publish event: {e}")
            raise

    async def health_check(self) -> Optional[bool]:
        """Redis health; None when Redis is not configured"""
        if not self.enabled:
            return None
        if not self.connected:
            return False
        try:
            await self.redis.ping()
            return True
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return False


# Global Redis client instance
redis_client = RedisClient()
