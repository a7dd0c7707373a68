# services/restaurant_service.py
from datetime import datetime
from fastapi.concurrency import run_in_threadpool
from pymongo.errors import DuplicateKeyError, PyMongoError
from core.exceptions import ValidationError, UnauthorizedError, ConflictError
from db.db_operation import MongoConnection
from settings.config import settings
from utils.hash import hash_password, verify_password
from utils.token import create_access_token
from utils.logger import get_logger

logger = get_logger("Restaurant_Service")

async def register_restaurant(mongo: MongoConnection, payload):
    """
    Register a restaurant and issue its access token.
    Name and external_ref uniqueness is enforced by the unique indexes,
    a duplicate surfaces as DuplicateKeyError on insert.
    """
    if not payload.name:
        raise ValidationError("Restaurant name is required")
    if len(payload.password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")
    if not payload.external_ref:
        raise ValidationError("External reference is required")

    access_token = create_access_token()
    # bcrypt is CPU bound, keep it off the event loop
    password_hash = await run_in_threadpool(hash_password, payload.password)
    doc = {
        "external_ref": payload.external_ref,
        "name": payload.name,
        "password_hash": password_hash,
        "auto_confirm": bool(payload.auto_confirm),
        "access_token": access_token,
        "created_at": datetime.utcnow()
    }
    try:
        result = await mongo.restaurants_collection.insert_one(doc)
    except DuplicateKeyError:
        logger.warning(f"Registration conflict for restaurant {payload.name}")
        raise ConflictError("Restaurant already exists")
    except PyMongoError:
        logger.exception("DB error registering restaurant")
        raise

    logger.info("Restaurant registered", extra={"restaurant_id": str(result.inserted_id)})
    return {"access_token": access_token, "token_type": "bearer", "id": str(result.inserted_id)}

async def login_restaurant(mongo: MongoConnection, payload):
    if not payload.name or not payload.password:
        raise ValidationError("Name and password are required")

    restaurant = await mongo.restaurants_collection.find_one({"name": payload.name})
    if not restaurant:
        logger.warning(f"Login failed: restaurant not found {payload.name}")
        raise UnauthorizedError("Invalid credentials")
    if not await run_in_threadpool(verify_password, payload.password, restaurant["password_hash"]):
        logger.warning(f"Login failed: wrong password {payload.name}")
        raise UnauthorizedError("Invalid credentials")

    logger.info(f"Login successful: {payload.name}")
    return {"access_token": restaurant["access_token"], "token_type": "bearer", "id": str(restaurant["_id"])}

async def list_restaurants(mongo: MongoConnection):
    cursor = mongo.restaurants_collection.find({}, {"password_hash": 0, "access_token": 0}).sort("name", 1)
    docs = await cursor.to_list(length=None)
    return [
        {
            "id": str(d["_id"]),
            "name": d["name"],
            "external_ref": d["external_ref"],
            "auto_confirm": d.get("auto_confirm", False),
            "created_at": d.get("created_at").isoformat() if d.get("created_at") else None
        } for d in docs
    ]
