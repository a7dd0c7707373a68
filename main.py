from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from settings.config import settings
from db.db_operation import MongoConnection, create_indexes
from db.redis_client import create_redis_client
from core.exceptions import global_exception_handler, request_validation_handler
from core.rate_limiter import RedisRateLimitMiddleware
from utils.logger import get_logger
from routes import restaurant_routes, table_routes, reservation_routes

logger = get_logger("main")

app = FastAPI(title="Table Reservation API", version="1.0.0")

@app.get("/")
async def health_check():
    logger.info("Health check is successful")
    return {
        "status": "ok",
        "app": settings.PROJECT_NAME,
        "message": "FastAPI is running"
    }

@app.on_event("startup")
async def startup_event():
    mongo = MongoConnection()
    await mongo.connect()
    await create_indexes(mongo)
    app.state.mongo = mongo

@app.on_event("shutdown")
async def shutdown_event():
    mongo = getattr(app.state, "mongo", None)
    if mongo is not None:
        mongo.close()

if settings.RATE_LIMIT_ENABLED:
    app.add_middleware(
        RedisRateLimitMiddleware,
        redis=create_redis_client(),
        requests=settings.RATE_LIMIT_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS
    )
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, global_exception_handler)
app.include_router(restaurant_routes.router)
app.include_router(table_routes.router)
app.include_router(reservation_routes.router)
