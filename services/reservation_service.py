from datetime import datetime
import re
from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from core.authorization import parse_object_id
from core.exceptions import ValidationError, UnauthorizedError, NotFoundError, ConflictError
from db.db_operation import MongoConnection
from models.reservation import ReservationStatus
from utils.logger import get_logger

logger = get_logger("Reservation_Service")

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")

def is_valid_email(email: str) -> bool:
    return "@" in email and "." in email

def validate_date(value: str):
    if not DATE_PATTERN.match(value or ""):
        raise ValidationError("Invalid date format, use YYYY-MM-DD")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError("Invalid date format, use YYYY-MM-DD")

def validate_time(value: str):
    if not TIME_PATTERN.match(value or ""):
        raise ValidationError("Invalid time format, use HH:MM")
    try:
        datetime.strptime(value, "%H:%M")
    except ValueError:
        raise ValidationError("Invalid time format, use HH:MM")

def slot_key(table_id: ObjectId, date: str, time: str) -> str:
    return f"{table_id}|{date}|{time}"

def validate_reservation(payload):
    if not payload.customer_name.strip():
        raise ValidationError("Customer name is required")
    if not is_valid_email(payload.customer_email):
        raise ValidationError("Invalid email")
    if not payload.customer_phone.strip():
        raise ValidationError("Customer phone is required")
    if payload.party_size <= 0:
        raise ValidationError("Party size must be greater than 0")
    validate_date(payload.date)
    validate_time(payload.time)

def check_capacity(table, party_size: int):
    min_people = table.get("min_people")
    max_people = table.get("max_people")
    if min_people is not None and party_size < min_people:
        raise ValidationError(f"This table requires at least {min_people} people")
    if max_people is not None and party_size > max_people:
        raise ValidationError(f"This table allows at most {max_people} people")

def _reservation_out(r) -> dict:
    return {
        "id": str(r["_id"]),
        "restaurant_id": str(r["restaurant_id"]),
        "table_id": str(r["table_id"]),
        "customer_name": r["customer_name"],
        "customer_email": r["customer_email"],
        "customer_phone": r["customer_phone"],
        "party_size": r["party_size"],
        "date": r["date"],
        "time": r["time"],
        "status": r["status"],
        "created_at": r.get("created_at").isoformat() if r.get("created_at") else None,
        "updated_at": r.get("updated_at").isoformat() if r.get("updated_at") else None
    }

async def create_reservation(mongo: MongoConnection, restaurant_id: ObjectId, payload):
    """
    Book a table slot for a customer.
    Validations:
      - customer fields, party size, date and time formats
      - table exists, belongs to restaurant_id and is reservable
      - party size within the table's min/max
    The slot is claimed by the insert itself: the unique index on slot_key
    rejects a second active reservation for the same table/date/time.
    """
    validate_reservation(payload)
    table_id = parse_object_id(payload.table_id, "table")

    table = await mongo.tables_collection.find_one({"_id": table_id})
    if table is None:
        raise NotFoundError("Table not found")
    if table["restaurant_id"] != restaurant_id:
        logger.warning(f"Restaurant {restaurant_id} tried to book table {table_id} of another restaurant")
        raise UnauthorizedError("Not allowed to book this table")
    if not table.get("reservable", True):
        raise ValidationError("This table does not accept reservations")
    check_capacity(table, payload.party_size)

    now = datetime.utcnow()
    doc = {
        "restaurant_id": restaurant_id,
        "table_id": table_id,
        "customer_name": payload.customer_name,
        "customer_email": payload.customer_email,
        "customer_phone": payload.customer_phone,
        "party_size": payload.party_size,
        "date": payload.date,
        "time": payload.time,
        "status": ReservationStatus.pending.value,
        "slot_key": slot_key(table_id, payload.date, payload.time),
        "created_at": now,
        "updated_at": now
    }
    try:
        result = await mongo.reservations_collection.insert_one(doc)
    except DuplicateKeyError:
        raise ConflictError("A reservation already exists for this table at this time")

    logger.info(
        "Reservation created",
        extra={"reservation_id": str(result.inserted_id), "table_id": str(table_id), "restaurant_id": str(restaurant_id)}
    )
    return {"id": str(result.inserted_id), "status": ReservationStatus.pending.value}

async def list_reservations(mongo: MongoConnection, restaurant_id: ObjectId, date: str | None = None, status: str | None = None):
    """Reservations of the restaurant, newest slot first, optionally filtered by date and/or status"""
    query = {"restaurant_id": restaurant_id}
    if date:
        query["date"] = date
    if status:
        query["status"] = status

    cursor = mongo.reservations_collection.find(query).sort([("date", -1), ("time", -1)])
    docs = await cursor.to_list(length=None)
    logger.info(f"Fetched {len(docs)} reservations for restaurant {restaurant_id}")
    return [_reservation_out(r) for r in docs]

async def confirm_reservation(mongo: MongoConnection, restaurant_id: ObjectId, reservation_id: str):
    oid = parse_object_id(reservation_id, "reservation")
    # ownership and state guard in one filter: missing, foreign and
    # non-pending reservations are indistinguishable to the caller
    result = await mongo.reservations_collection.update_one(
        {"_id": oid, "restaurant_id": restaurant_id, "status": ReservationStatus.pending.value},
        {"$set": {"status": ReservationStatus.confirmed.value, "updated_at": datetime.utcnow()}}
    )
    if result.modified_count == 0:
        raise NotFoundError("Reservation not found or already processed")

    logger.info(f"Reservation {reservation_id} confirmed by restaurant {restaurant_id}")
    return {"id": reservation_id, "status": ReservationStatus.confirmed.value}

async def cancel_reservation(mongo: MongoConnection, restaurant_id: ObjectId, reservation_id: str):
    oid = parse_object_id(reservation_id, "reservation")
    result = await mongo.reservations_collection.update_one(
        {"_id": oid, "restaurant_id": restaurant_id, "status": {"$ne": ReservationStatus.cancelled.value}},
        {
            "$set": {"status": ReservationStatus.cancelled.value, "updated_at": datetime.utcnow()},
            # releases the slot for new bookings
            "$unset": {"slot_key": ""}
        }
    )
    if result.modified_count == 0:
        raise NotFoundError("Reservation not found or already cancelled")

    logger.info(f"Reservation {reservation_id} cancelled by restaurant {restaurant_id}")
    return {"id": reservation_id, "status": ReservationStatus.cancelled.value}
