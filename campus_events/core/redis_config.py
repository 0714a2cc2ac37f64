import os

import redis

# Redis configuration
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")


def get_redis_url():
    return REDIS_URL


def get_redis_client():
    """Get Redis client for locks and upload tickets."""
    return redis.from_url(get_redis_url(), decode_responses=True)
