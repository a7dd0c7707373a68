from bson import ObjectId
from core.exceptions import UnauthorizedError
from db.db_operation import MongoConnection
from utils.logger import get_logger

logger = get_logger("Security_Utils")

async def resolve_restaurant_id(mongo: MongoConnection, token: str) -> ObjectId:
    """
    Map an access token to the id of the restaurant that owns it.
    Raises UnauthorizedError when no restaurant holds the token.
    """
    if not token:
        raise UnauthorizedError("Missing access token")
    restaurant = await mongo.restaurants_collection.find_one({"access_token": token}, {"_id": 1})
    if restaurant is None:
        logger.warning("Access token did not match any restaurant")
        raise UnauthorizedError("Invalid token")
    return restaurant["_id"]
