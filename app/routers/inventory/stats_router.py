from fastapi import APIRouter, Depends

from app.core.db import Database, get_db
from app.schemas.inventory.stats_schemas import StatsOut
from app.services.inventory.stats_service import get_stats
from app.utils.logger import get_logger

router = APIRouter(prefix="/stats", tags=["Stats"])
logger = get_logger(__name__)


@router.get("", response_model=StatsOut, response_model_exclude_unset=True)
async def get_stats_api(db: Database = Depends(get_db)):
    logger.info("Get stats")
    return await get_stats(db)
