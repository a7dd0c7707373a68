# scripts/seed_demo.py
import asyncio
from core.exceptions import ConflictError
from db.db_operation import MongoConnection, create_indexes
from models.restaurant import RestaurantRegister
from models.table import TableCreate
from services.restaurant_service import register_restaurant
from services.table_service import create_table

DEMO_RESTAURANT = RestaurantRegister(external_ref="DEMO-1", name="Bistro", password="secret1", auto_confirm=False)

DEMO_TABLES = [
    {"name": "T1", "shape": "square", "pos_x": 40, "pos_y": 40, "size_x": 80, "size_y": 80, "min_people": 2, "max_people": 4},
    {"name": "T2", "shape": "square", "pos_x": 160, "pos_y": 40, "size_x": 80, "size_y": 80, "min_people": 2, "max_people": 4},
    {"name": "T3", "shape": "circle", "pos_x": 40, "pos_y": 160, "size_x": 100, "size_y": 100, "min_people": 4, "max_people": 8},
    {"name": "Bar", "kind": "bar", "shape": "square", "pos_x": 280, "pos_y": 40, "size_x": 200, "size_y": 40, "reservable": False},
]

async def seed(mongo: MongoConnection):
    """Create the demo restaurant and its floor plan. Running it twice changes nothing."""
    await create_indexes(mongo)
    restaurants = mongo.restaurants_collection
    existing = await restaurants.find_one({"name": DEMO_RESTAURANT.name})
    if existing is None:
        created = await register_restaurant(mongo, DEMO_RESTAURANT)
        restaurant = await restaurants.find_one({"access_token": created["access_token"]})
        print("Created restaurant:", restaurant["name"], created["id"])
    else:
        restaurant = existing
        print("Restaurant already exists:", restaurant["name"])

    created_tables = 0
    for table in DEMO_TABLES:
        payload = TableCreate(restaurant_id=str(restaurant["_id"]), **table)
        try:
            await create_table(mongo, restaurant["_id"], payload)
            created_tables += 1
        except ConflictError:
            continue
    print(f"Created {created_tables} tables")
    return {"id": str(restaurant["_id"]), "access_token": restaurant["access_token"], "tables_created": created_tables}

if __name__ == "__main__":
    conn = MongoConnection()
    try:
        asyncio.run(seed(conn))
    finally:
        conn.close()
