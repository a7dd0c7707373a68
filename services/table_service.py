# services/table_service.py
from datetime import datetime
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError
from core.exceptions import ValidationError, ConflictError
from db.db_operation import MongoConnection
from models.table import TABLE_SHAPES
from utils.logger import get_logger

logger = get_logger("Table_Service")

def _table_out(d) -> dict:
    return {
        "id": str(d["_id"]),
        "restaurant_id": str(d["restaurant_id"]),
        "kind": d.get("kind", "table"),
        "name": d["name"],
        "pos_x": d.get("pos_x", 0.0),
        "pos_y": d.get("pos_y", 0.0),
        "size_x": d.get("size_x", 0.0),
        "size_y": d.get("size_y", 0.0),
        "shape": d["shape"],
        "reservable": d.get("reservable", True),
        "min_people": d.get("min_people"),
        "max_people": d.get("max_people")
    }

def validate_table(payload):
    if not payload.name or not payload.name.strip():
        raise ValidationError("Table name is required")
    if payload.shape not in TABLE_SHAPES:
        raise ValidationError("Shape must be 'square' or 'circle'")
    for label, value in (("Minimum", payload.min_people), ("Maximum", payload.max_people)):
        if value is not None and value < 1:
            raise ValidationError(f"{label} people must be at least 1")
    if payload.min_people is not None and payload.max_people is not None:
        if payload.min_people > payload.max_people:
            raise ValidationError("Minimum people cannot be greater than maximum people")

async def create_table(mongo: MongoConnection, restaurant_id: ObjectId, payload):
    """
    Create a table on the restaurant's floor plan. Enforce unique (restaurant_id + name).
    """
    validate_table(payload)
    doc = {
        "restaurant_id": restaurant_id,
        "kind": payload.kind,
        "name": payload.name,
        "pos_x": float(payload.pos_x),
        "pos_y": float(payload.pos_y),
        "size_x": float(payload.size_x),
        "size_y": float(payload.size_y),
        "shape": payload.shape,
        "reservable": bool(payload.reservable),
        "min_people": payload.min_people,
        "max_people": payload.max_people,
        "created_at": datetime.utcnow()
    }
    try:
        result = await mongo.tables_collection.insert_one(doc)
    except DuplicateKeyError:
        raise ConflictError(f"A table named '{payload.name}' already exists")
    except PyMongoError:
        logger.exception("DB error creating table")
        raise

    logger.info("Table created", extra={"restaurant_id": str(restaurant_id), "table_id": str(result.inserted_id)})
    return {"id": str(result.inserted_id)}

async def list_tables(mongo: MongoConnection, restaurant_id: ObjectId):
    cursor = mongo.tables_collection.find({"restaurant_id": restaurant_id}).sort("name", 1)
    docs = await cursor.to_list(length=None)
    logger.info(f"Fetched {len(docs)} tables for restaurant {restaurant_id}")
    return [_table_out(d) for d in docs]

async def clear_tables(mongo: MongoConnection, restaurant_id: ObjectId) -> int:
    result = await mongo.tables_collection.delete_many({"restaurant_id": restaurant_id})
    logger.info(f"Deleted {result.deleted_count} tables for restaurant {restaurant_id}")
    return result.deleted_count
