# core/authorization.py
from bson import ObjectId
from bson.errors import InvalidId
from core.dependencies import CurrentRestaurant
from core.exceptions import ValidationError, UnauthorizedError
from utils.logger import get_logger

logger = get_logger("Authorization")

def parse_object_id(value: str, label: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(f"Invalid {label} id")

def require_owner(current: CurrentRestaurant, restaurant_id: str) -> ObjectId:
    """
    Resolve the restaurant id named by the request and make sure it is the
    caller's own. A foreign restaurant is reported as 401, same as a bad token.
    """
    oid = parse_object_id(restaurant_id, "restaurant")
    if oid != current.id:
        logger.warning(f"Forbidden: restaurant {current.id} tried to access restaurant {oid}")
        raise UnauthorizedError("Not allowed to access this restaurant")
    return oid
