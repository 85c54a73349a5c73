# src/engine/db.py
import redis.asyncio as redis

from engine.settings import Settings


def create_redis_client(settings: Settings) -> redis.Redis:
    # from_url does not connect until the first command
    return redis.from_url(settings.REDIS_URL, decode_responses=True)
