import time
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from redis.exceptions import RedisError
from utils.logger import get_logger

logger = get_logger("RedisRateLimit")

class RedisRateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window request counter per client and path, kept in Redis.
    Only the unauthenticated account endpoints are limited.
    """

    def __init__(
        self,
        app,
        redis,
        requests: int = 10,
        window_seconds: int = 60,
        include_paths: frozenset = frozenset({"/restaurants/login", "/restaurants/register"})
    ):
        super().__init__(app)
        self.redis = redis
        self.requests = requests
        self.window = window_seconds
        self.include_paths = include_paths

    def _get_identity(self, request: Request) -> str:
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next):
        if request.url.path not in self.include_paths:
            return await call_next(request)

        identity = self._get_identity(request)
        now = int(time.time())
        window_key = now // self.window
        redis_key = f"rate:{identity}:{request.url.path}:{window_key}"

        try:
            current_count = await self.redis.incr(redis_key)

            if current_count == 1:
                await self.redis.expire(redis_key, self.window)

            if current_count > self.requests:
                logger.warning(
                    "Rate limit exceeded",
                    extra={"identity": identity, "count": current_count}
                )
                return JSONResponse(
                    status_code=429,
                    content={"detail": "Too many requests, please slow down"}
                )
        except (RedisError, OSError) as e:
            # fail open
            logger.error("Redis rate limit error", exc_info=e)

        return await call_next(request)
