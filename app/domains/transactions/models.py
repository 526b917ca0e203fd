# app/domains/transactions/models.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class Transaction(BaseModel):
    # Documents are schema-on-read: stored values are passed through untouched
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mongo_id: Any = Field(alias="_id")
    id: Optional[Any] = None
    title: Optional[Any] = None
    description: Optional[Any] = None
    price: Optional[Any] = None
    category: Optional[Any] = None
    image: Optional[Any] = None
    sold: Optional[Any] = None
    dateOfSale: Optional[Any] = None


class Statistics(BaseModel):
    totalSaleAmount: float = 0
    totalSoldItems: int = 0
    totalNotSoldItems: int = 0


class BarChartEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    range: str = Field(alias="_id")
    count: int


class CombinedData(BaseModel):
    transactions: List[Transaction]
    statistics: Statistics
    barChartData: List[BarChartEntry]
    pieChartData: List[Dict[str, int]]
