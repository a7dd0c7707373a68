from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from settings.config import settings
from utils.logger import get_logger

logger = get_logger("DB_OPERATION")

async def create_indexes(mongo: "MongoConnection"):
    """
    Unique indexes carry every uniqueness rule of the service, so the
    insert itself is the conflict check.
    """
    restaurants = mongo.restaurants_collection
    await restaurants.create_index("name", unique=True)
    await restaurants.create_index("external_ref", unique=True)
    await restaurants.create_index("access_token", unique=True)

    tables = mongo.tables_collection
    await tables.create_index("restaurant_id")
    await tables.create_index([("restaurant_id", ASCENDING), ("name", ASCENDING)], unique=True)

    reservations = mongo.reservations_collection
    await reservations.create_index("restaurant_id")
    await reservations.create_index("date")
    await reservations.create_index("status")
    # slot_key only exists while a reservation is active
    await reservations.create_index("slot_key", unique=True, sparse=True)
    logger.info("Indexes created")

class MongoConnection:
    def __init__(self, client=None, db_name: str = None):
        logger.info("Initializing MongoDB Connection")
        self.client = client if client is not None else AsyncIOMotorClient(settings.MONGO_URI)
        self.db_name = db_name or settings.DB_NAME
        self.db = self.client[self.db_name]
        self.restaurants_collection = self.db["restaurants"]
        self.tables_collection = self.db["tables"]
        self.reservations_collection = self.db["reservations"]

    async def connect(self):
        try:
            # Force an actual connection & authentication check
            await self.db.command("ping")
            logger.info("Successfully connected to MongoDB and authenticated.")
            logger.info(f"Using Database: {self.db_name}")
            logger.info(
                f"Collections ready: {self.restaurants_collection.name}, "
                f"{self.tables_collection.name}, {self.reservations_collection.name}"
            )
        except Exception as e:
            logger.error(f"Could not connect to MongoDB: {e}")
            raise e

    def close(self):
        self.client.close()
        logger.info("MongoDB connection closed")
