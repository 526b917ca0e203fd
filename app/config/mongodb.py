from motor.motor_asyncio import AsyncIOMotorClient
import logging

logger = logging.getLogger(__name__)


class MongoDB:
    def __init__(self, uri: str, db_name: str, collection_name: str = "transactions"):
        self.uri = uri
        self.client = None
        self.db = None
        self.db_name = db_name
        self.collection_name = collection_name

    async def init_db(self):
        # Motor connects lazily, the first command opens the pool
        self.client = AsyncIOMotorClient(self.uri)
        self.db = self.client[self.db_name]
        logger.info(f"Using MongoDB database '{self.db_name}'")

    @property
    def transactions(self):
        if self.db is None:
            raise RuntimeError("MongoDB not connected")
        return self.db[self.collection_name]

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None
