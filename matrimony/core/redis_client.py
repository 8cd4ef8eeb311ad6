import redis
import json
from typing import Dict, Any
from matrimony.core import config
import logging

logger = logging.getLogger(__name__)


class RedisClient:
    def __init__(self, enabled: bool = config.CACHE_ENABLED):
        self.enabled = enabled
        self.client = redis.Redis.from_url(config.REDIS_URL, decode_responses=True) if enabled else None
        logger.info(f"Redis client initialized with URL: {config.REDIS_URL} (enabled={enabled})")

    def cache_profile(self, profile_id: int, profile_data: Dict[str, Any], ttl: int = config.REDIS_CACHE_TTL):
        """Cache a single serialized profile"""
        if not self.enabled:
            return False
        key = f"profile:{profile_id}"
        try:
            self.client.set(key, json.dumps(profile_data), ex=ttl)
            logger.debug(f"Cached profile {profile_id}")
            return True
        except Exception as e:
            logger.error(f"Error caching profile {profile_id}: {e}")
            return False

    def get_cached_profile(self, profile_id: int) -> Dict[str, Any]:
        """Get a cached profile, empty dict on miss"""
        if not self.enabled:
            return {}
        key = f"profile:{profile_id}"
        try:
            data = self.client.get(key)
            if data:
                profile = json.loads(data)
                logger.debug(f"Retrieved cached profile {profile_id}")
                return profile
            return {}
        except Exception as e:
            logger.error(f"Error retrieving cached profile {profile_id}: {e}")
            return {}

    def delete_profile(self, profile_id: int):
        """Drop a cached profile after it changes"""
        if not self.enabled:
            return False
        key = f"profile:{profile_id}"
        try:
            self.client.delete(key)
            logger.debug(f"Deleted cached profile {profile_id}")
            return True
        except Exception as e:
            logger.error(f"Error deleting cached profile {profile_id}: {e}")
            return False
