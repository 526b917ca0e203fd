from fastapi import APIRouter, Depends, HTTPException
import logging

from app.config.setting import settings
from app.domains.seed.service import SeedService
from app.domains.transactions.routes import get_collection
from app.shared.dataset_client import DatasetClient

logger = logging.getLogger(__name__)

router = APIRouter()


def get_seed_service(collection=Depends(get_collection)) -> SeedService:
    client = DatasetClient(settings.seed_url, timeout=settings.seed_timeout_seconds)
    return SeedService(collection, client)


@router.get("/seed")
async def seed_database(service: SeedService = Depends(get_seed_service)):
    try:
        count = await service.seed()
        return {"message": "Database seeded successfully", "count": count}
    except Exception as e:
        logger.error(f"Error seeding database: {e}")
        raise HTTPException(status_code=500, detail="Error seeding database")
