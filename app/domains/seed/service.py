import logging

from fastapi.concurrency import run_in_threadpool
from bson.errors import InvalidDocument
from pymongo.errors import PyMongoError

from app.shared.dataset_client import DatasetClient
from app.shared.exceptions import StoreError

logger = logging.getLogger(__name__)


class SeedService:
    def __init__(self, collection, client: DatasetClient):
        self.collection = collection
        self.client = client

    async def seed(self) -> int:
        # requests is blocking, keep it off the event loop
        transactions = await run_in_threadpool(self.client.fetch_transactions)
        if not transactions:
            logger.info("Dataset is empty, nothing to insert")
            return 0

        try:
            result = await self.collection.insert_many(transactions)
        except (PyMongoError, InvalidDocument, OverflowError) as e:
            raise StoreError(f"Bulk insert failed: {e}") from e

        count = len(result.inserted_ids)
        logger.info(f"Inserted {count} transactions")
        return count
