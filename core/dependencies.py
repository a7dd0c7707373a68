from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from bson import ObjectId
from pydantic import BaseModel, ConfigDict
from db.db_operation import MongoConnection
from core.security import resolve_restaurant_id
from utils.logger import get_logger

logger = get_logger("Dependencies")

# tells fastapi to expect a bearer token in the Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="restaurants/login")

class CurrentRestaurant(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: ObjectId

def get_mongo(request: Request) -> MongoConnection:
    """The store handle opened by the application lifespan."""
    return request.app.state.mongo

async def get_current_restaurant(
    token: str = Depends(oauth2_scheme),
    mongo: MongoConnection = Depends(get_mongo)
) -> CurrentRestaurant:
    logger.debug("Resolving restaurant from bearer token")
    restaurant_id = await resolve_restaurant_id(mongo, token)
    return CurrentRestaurant(id=restaurant_id)
