# routes/table_routes.py
from fastapi import APIRouter, Depends, Query
from typing import List
from pymongo.errors import PyMongoError
from core.authorization import require_owner
from core.dependencies import get_current_restaurant, get_mongo, CurrentRestaurant
from core.exceptions import InternalError
from db.db_operation import MongoConnection
from models.table import TableCreate, TableOut, TableCreated, TablesCleared
from services.table_service import create_table, list_tables, clear_tables
from utils.logger import get_logger

logger = get_logger("Table_Route")
router = APIRouter(prefix="/tables", tags=["Tables"])

@router.post("", response_model=TableCreated)
async def api_create_table(
    payload: TableCreate,
    current: CurrentRestaurant = Depends(get_current_restaurant),
    mongo: MongoConnection = Depends(get_mongo)
):
    restaurant_id = require_owner(current, payload.restaurant_id)
    try:
        return await create_table(mongo, restaurant_id, payload)
    except PyMongoError:
        logger.exception("Error creating table")
        raise InternalError()

@router.get("", response_model=List[TableOut])
async def api_list_tables(
    restaurant_id: str = Query(...),
    current: CurrentRestaurant = Depends(get_current_restaurant),
    mongo: MongoConnection = Depends(get_mongo)
):
    oid = require_owner(current, restaurant_id)
    try:
        return await list_tables(mongo, oid)
    except PyMongoError:
        logger.exception("Error listing tables")
        raise InternalError()

# Destructive: removes the whole floor plan
@router.delete("/clear", response_model=TablesCleared)
async def api_clear_tables(
    restaurant_id: str = Query(...),
    current: CurrentRestaurant = Depends(get_current_restaurant),
    mongo: MongoConnection = Depends(get_mongo)
):
    oid = require_owner(current, restaurant_id)
    try:
        deleted = await clear_tables(mongo, oid)
        return {"deleted_count": deleted}
    except PyMongoError:
        logger.exception("Error clearing tables")
        raise InternalError()
