"""MongoDB database connection using Motor (async driver)."""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import settings


logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure the indexes exist."""
        self.client = AsyncIOMotorClient(settings.mongodb_url)
        self.db = self.client[settings.mongodb_db_name]
        await ensure_indexes(self.db)
        logger.info("Connected to MongoDB: %s", settings.mongodb_db_name)

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client is not None:
            self.client.close()
            logger.info("Disconnected from MongoDB")


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes the services query by."""
    await db["users"].create_index("email", unique=True)
    await db["rounds"].create_index([("user_id", 1), ("played_on", -1)])
    await db["rounds"].create_index([("course_id", 1), ("user_id", 1)])
    await db["goals"].create_index([("user_id", 1), ("created_at", -1)])
    await db["courses"].create_index(
        [
            ("name", 1),
            ("location.city", 1),
            ("location.state", 1),
            ("location.country", 1),
        ],
        unique=True,
        collation={"locale": "en", "strength": 2},
    )


# Global database instance
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get database instance."""
    if database.db is None:
        raise RuntimeError("Database not connected")
    return database.db
