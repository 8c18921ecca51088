# app/infrastructure/mongo_connection.py

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import PyMongoError
from config.settings import Settings
import logging

logger = logging.getLogger(__name__)


class MongoConnection:
    """Simple MongoDB connection manager using motor"""
    
    def __init__(self):
        self.client: AsyncIOMotorClient | None = None
        self.collection: AsyncIOMotorCollection | None = None
    
    async def connect(self, settings: Settings):
        """Connect to MongoDB and make sure the messages collection is indexed"""
        if self.client is not None:
            return  # Already connected
        
        try:
            self.client = AsyncIOMotorClient(
                settings.MONGO_URI,
                tz_aware=True,  # Return timestamps as aware UTC datetimes
                serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            )
            # Test connection
            await self.client.admin.command("ping")
            
            self.collection = self.client[settings.MONGO_DB][settings.MONGO_COLLECTION]
            await self.collection.create_index([("timestamp", ASCENDING), ("_id", ASCENDING)])
            
            logger.info(f"Connected to MongoDB database '{settings.MONGO_DB}' (collection '{settings.MONGO_COLLECTION}')")
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            if self.client is not None:
                self.client.close()
            self.client = None
            self.collection = None
            raise
    
    async def disconnect(self):
        """Disconnect from MongoDB"""
        if self.client:
            self.client.close()
            self.client = None
            self.collection = None
            logger.info("Disconnected from MongoDB")
    
    def get_collection(self) -> AsyncIOMotorCollection:
        """Get the messages collection"""
        if self.collection is None:
            raise RuntimeError("MongoDB client is not connected. Call connect() first.")
        return self.collection


# Shared instance
mongo_connection = MongoConnection()
