from fastapi import APIRouter, Request, Depends, HTTPException, Query
import logging
from typing import Dict, List, Optional

from app.domains.transactions.models import BarChartEntry, CombinedData, Statistics, Transaction
from app.domains.transactions.services import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_PAGE = 100_000


# The MongoDB handle is opened on startup and kept on app.state
def get_collection(request: Request):
    return request.app.state.mongodb.transactions


def get_transaction_service(collection=Depends(get_collection)) -> TransactionService:
    return TransactionService(collection)


@router.get("/transactions", response_model=List[Transaction])
async def get_transactions(
    month: Optional[str] = None,
    search: str = "",
    page: int = Query(1, ge=1, le=MAX_PAGE),
    per_page: int = Query(10, ge=1, le=100, alias="perPage"),
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return await service.list_transactions(month=month, search=search, page=page, per_page=per_page)
    except Exception as e:
        logger.error(f"Error fetching transactions: {e}")
        raise HTTPException(status_code=500, detail="Error fetching transactions")


@router.get("/statistics", response_model=Statistics)
async def get_statistics(
    month: Optional[str] = None,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return await service.get_statistics(month)
    except Exception as e:
        logger.error(f"Error fetching statistics: {e}")
        raise HTTPException(status_code=500, detail="Error fetching statistics")


@router.get("/bar-chart", response_model=List[BarChartEntry])
async def get_bar_chart(
    month: Optional[str] = None,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return await service.get_bar_chart(month)
    except Exception as e:
        logger.error(f"Error fetching bar chart data: {e}")
        raise HTTPException(status_code=500, detail="Error fetching bar chart data")


@router.get("/pie-chart", response_model=List[Dict[str, int]])
async def get_pie_chart(
    month: Optional[str] = None,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return await service.get_pie_chart(month)
    except Exception as e:
        logger.error(f"Error fetching pie chart data: {e}")
        raise HTTPException(status_code=500, detail="Error fetching pie chart data")


@router.get("/combined-data", response_model=CombinedData)
async def get_combined_data(
    month: Optional[str] = None,
    service: TransactionService = Depends(get_transaction_service),
):
    try:
        return await service.get_combined(month)
    except Exception as e:
        logger.error(f"Error fetching combined data: {e}")
        raise HTTPException(status_code=500, detail="Error fetching combined data")
