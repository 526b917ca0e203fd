import asyncio
import logging
from typing import Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from app.domains.transactions import filters
from app.shared.exceptions import StoreError

logger = logging.getLogger(__name__)


def convert_objectid_to_str(documents):
    for document in documents:
        if isinstance(document.get("_id"), ObjectId):
            document["_id"] = str(document["_id"])
    return documents


class TransactionService:
    def __init__(self, collection):
        self.collection = collection

    async def list_transactions(
        self,
        month: Optional[str] = None,
        search: Optional[str] = "",
        page: int = 1,
        per_page: int = 10,
    ):
        query = filters.transactions_filter(month, search)
        skip = (page - 1) * per_page
        logger.debug(f"Listing transactions: query={query}, skip={skip}, limit={per_page}")
        try:
            cursor = self.collection.find(query).sort("_id", 1).skip(skip).limit(per_page)
            results = await cursor.to_list(length=per_page)
        except PyMongoError as e:
            raise StoreError(f"Transaction query failed: {e}") from e
        return convert_objectid_to_str(results)

    async def _total_sale_amount(self, month: Optional[str]):
        result = await self._aggregate(filters.sale_amount_pipeline(month))
        return result[0]["totalAmount"] if result else 0

    async def _count(self, month: Optional[str], sold: bool):
        try:
            return await self.collection.count_documents({**filters.month_filter(month), "sold": sold})
        except PyMongoError as e:
            raise StoreError(f"Count failed: {e}") from e

    async def get_statistics(self, month: Optional[str] = None):
        total_amount, sold, not_sold = await asyncio.gather(
            self._total_sale_amount(month),
            self._count(month, True),
            self._count(month, False),
        )
        return {
            "totalSaleAmount": total_amount,
            "totalSoldItems": sold,
            "totalNotSoldItems": not_sold,
        }

    async def get_bar_chart(self, month: Optional[str] = None):
        result = await self._aggregate(filters.bar_chart_pipeline(month))
        result.sort(key=lambda item: filters.BUCKET_ORDER.get(item["_id"], len(filters.BUCKET_ORDER)))
        return [{"_id": item["_id"], "count": item["count"]} for item in result]

    async def get_pie_chart(self, month: Optional[str] = None):
        result = await self._aggregate(filters.pie_chart_pipeline(month))
        # records without a category group under null
        return [{"null" if item["_id"] is None else str(item["_id"]): item["count"]} for item in result]

    async def get_combined(self, month: Optional[str] = None):
        # gather propagates the first failure, so no partial response is built
        transactions, statistics, bar_chart, pie_chart = await asyncio.gather(
            self.list_transactions(month=month),
            self.get_statistics(month),
            self.get_bar_chart(month),
            self.get_pie_chart(month),
        )
        return {
            "transactions": transactions,
            "statistics": statistics,
            "barChartData": bar_chart,
            "pieChartData": pie_chart,
        }

    async def _aggregate(self, pipeline):
        logger.debug(f"Pipeline: {pipeline}")
        try:
            return await self.collection.aggregate(pipeline).to_list(None)
        except PyMongoError as e:
            raise StoreError(f"Aggregation failed: {e}") from e
