# models/table.py
from pydantic import BaseModel
from typing import Optional

TABLE_SHAPES = ("square", "circle")

class TableCreate(BaseModel):
    restaurant_id: str
    kind: str = "table"
    name: str
    pos_x: float = 0.0
    pos_y: float = 0.0
    size_x: float = 0.0
    size_y: float = 0.0
    shape: str
    reservable: bool = True
    min_people: Optional[int] = None
    max_people: Optional[int] = None

class TableOut(BaseModel):
    id: str
    restaurant_id: str
    kind: str
    name: str
    pos_x: float
    pos_y: float
    size_x: float
    size_y: float
    shape: str
    reservable: bool
    min_people: Optional[int] = None
    max_people: Optional[int] = None

class TableCreated(BaseModel):
    id: str

class TablesCleared(BaseModel):
    deleted_count: int
