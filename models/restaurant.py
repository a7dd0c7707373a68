# models/restaurant.py
from pydantic import BaseModel
from typing import Optional

class RestaurantRegister(BaseModel):
    external_ref: str
    name: str
    password: str
    auto_confirm: bool = False

class RestaurantLogin(BaseModel):
    name: str
    password: str

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    id: str

class RestaurantSummary(BaseModel):
    """Public listing view. Never carries the password hash or the token."""
    id: str
    name: str
    external_ref: str
    auto_confirm: bool = False
    created_at: Optional[str] = None
