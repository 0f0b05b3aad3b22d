from typing import List

from fastapi import APIRouter, Depends

from app.core.db import Database, get_db
from app.schemas.masters.common_schemas import MessageOut
from app.schemas.masters.category_schemas import CategoryCreate, CategoryUpdate, CategoryOut
from app.services.masters.category_service import (
    create_category,
    list_categories,
    get_category,
    update_category,
    delete_category,
)
from app.utils.logger import get_logger

router = APIRouter(prefix="/categories", tags=["Categories"])
logger = get_logger(__name__)


@router.get("", response_model=List[CategoryOut], response_model_exclude_unset=True)
async def list_categories_api(db: Database = Depends(get_db)):
    logger.info("List categories")
    return await list_categories(db)


@router.post("", response_model=CategoryOut, status_code=201, response_model_exclude_unset=True)
async def create_category_api(payload: CategoryCreate, db: Database = Depends(get_db)):
    logger.info("Create category", extra={"category_name": payload.name})
    return await create_category(db, payload)


@router.get("/{category_id}", response_model=CategoryOut, response_model_exclude_unset=True)
async def get_category_api(category_id: int, db: Database = Depends(get_db)):
    logger.info("Get category", extra={"category_id": category_id})
    return await get_category(db, category_id)


@router.put("/{category_id}", response_model=CategoryOut, response_model_exclude_unset=True)
async def update_category_api(
    category_id: int,
    payload: CategoryUpdate,
    db: Database = Depends(get_db),
):
    logger.info("Update category", extra={"category_id": category_id})
    return await update_category(db, category_id, payload)


@router.delete("/{category_id}", response_model=MessageOut)
async def delete_category_api(category_id: int, db: Database = Depends(get_db)):
    logger.info("Delete category", extra={"category_id": category_id})
    return await delete_category(db, category_id)
