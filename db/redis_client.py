from redis import asyncio as aioredis
from settings.config import settings

def create_redis_client():
    return aioredis.from_url(settings.REDIS_URL, decode_responses=True)
