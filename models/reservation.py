# models/reservation.py
from enum import Enum
from pydantic import BaseModel
from typing import Optional

class ReservationStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"

class ReservationCreate(BaseModel):
    table_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    party_size: int
    date: str
    time: str

class ReservationOut(BaseModel):
    id: str
    restaurant_id: str
    table_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    party_size: int
    date: str
    time: str
    status: ReservationStatus
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

class ReservationState(BaseModel):
    id: str
    status: ReservationStatus
