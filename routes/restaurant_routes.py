# routes/restaurant_routes.py
from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError
from core.dependencies import get_mongo
from core.exceptions import InternalError
from db.db_operation import MongoConnection
from models.restaurant import RestaurantRegister, RestaurantLogin, TokenOut, RestaurantSummary
from services.restaurant_service import register_restaurant, login_restaurant, list_restaurants
from utils.logger import get_logger

logger = get_logger("Restaurant_Route")
router = APIRouter(prefix="/restaurants", tags=["Restaurants"])

@router.post("/register", response_model=TokenOut)
async def api_register_restaurant(payload: RestaurantRegister, mongo: MongoConnection = Depends(get_mongo)):
    logger.info(f"Attempting to register restaurant: {payload.name}")
    try:
        return await register_restaurant(mongo, payload)
    except PyMongoError:
        logger.exception("Database error during restaurant registration")
        raise InternalError()

@router.post("/login", response_model=TokenOut)
async def api_login_restaurant(payload: RestaurantLogin, mongo: MongoConnection = Depends(get_mongo)):
    logger.info(f"Login attempt for: {payload.name}")
    try:
        return await login_restaurant(mongo, payload)
    except PyMongoError:
        logger.exception("Database error during login")
        raise InternalError()

# Public: list registered restaurants
@router.get("/all", response_model=list[RestaurantSummary])
async def api_list_restaurants(mongo: MongoConnection = Depends(get_mongo)):
    try:
        return await list_restaurants(mongo)
    except PyMongoError:
        logger.exception("Error listing restaurants")
        raise InternalError()
