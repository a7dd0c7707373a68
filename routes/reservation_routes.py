from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from pymongo.errors import PyMongoError
from core.dependencies import get_current_restaurant, get_mongo, CurrentRestaurant
from core.exceptions import InternalError
from db.db_operation import MongoConnection
from models.reservation import ReservationCreate, ReservationOut, ReservationState
from services.reservation_service import create_reservation, list_reservations, confirm_reservation, cancel_reservation
from utils.logger import get_logger

logger = get_logger("Reservation_Route")

router = APIRouter(prefix="/reservations", tags=["Reservations"])

@router.post("", response_model=ReservationState)
async def api_create_reservation(
    payload: ReservationCreate,
    current: CurrentRestaurant = Depends(get_current_restaurant),
    mongo: MongoConnection = Depends(get_mongo)
):
    """Book a table; the reservation starts as pending"""
    logger.info(f"Reservation request for table {payload.table_id} on {payload.date} {payload.time}")
    try:
        return await create_reservation(mongo, current.id, payload)
    except PyMongoError:
        logger.exception("Error creating reservation")
        raise InternalError()

@router.get("", response_model=List[ReservationOut])
async def api_list_reservations(
    date: Optional[str] = Query(None, description="Filter by date (YYYY-MM-DD)"),
    status: Optional[str] = Query(None, description="Filter by reservation status"),
    current: CurrentRestaurant = Depends(get_current_restaurant),
    mongo: MongoConnection = Depends(get_mongo)
):
    try:
        return await list_reservations(mongo, current.id, date, status)
    except PyMongoError:
        logger.exception("Error listing reservations")
        raise InternalError()

@router.post("/{reservation_id}/confirm", response_model=ReservationState)
async def api_confirm_reservation(
    reservation_id: str,
    current: CurrentRestaurant = Depends(get_current_restaurant),
    mongo: MongoConnection = Depends(get_mongo)
):
    """Only pending reservations can be confirmed"""
    try:
        return await confirm_reservation(mongo, current.id, reservation_id)
    except PyMongoError:
        logger.exception("Error confirming reservation")
        raise InternalError()

@router.post("/{reservation_id}/cancel", response_model=ReservationState)
async def api_cancel_reservation(
    reservation_id: str,
    current: CurrentRestaurant = Depends(get_current_restaurant),
    mongo: MongoConnection = Depends(get_mongo)
):
    try:
        return await cancel_reservation(mongo, current.id, reservation_id)
    except PyMongoError:
        logger.exception("Error cancelling reservation")
        raise InternalError()
