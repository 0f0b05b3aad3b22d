# app/routers/masters/product_router.py

from typing import List

from fastapi import APIRouter, Depends

from app.core.db import Database, get_db
from app.schemas.masters.common_schemas import MessageOut
from app.schemas.masters.product_schemas import ProductCreate, ProductUpdate, ProductOut
from app.schemas.inventory.stock_movement_schemas import StockMovementOut
from app.services.masters.product_service import (
    create_product,
    list_products,
    get_product,
    update_product,
    delete_product,
    get_product_movements,
)
from app.utils.logger import get_logger

router = APIRouter(prefix="/products", tags=["Products"])
logger = get_logger(__name__)


@router.get("", response_model=List[ProductOut], response_model_exclude_unset=True)
async def list_products_api(db: Database = Depends(get_db)):
    logger.info("List products")
    return await list_products(db)


@router.post(
    "",
    response_model=ProductOut,
    status_code=201,
    response_model_exclude_unset=True,
)
async def create_product_api(payload: ProductCreate, db: Database = Depends(get_db)):
    logger.info("Create product", extra={"sku": payload.sku})
    return await create_product(db, payload)


@router.get("/{product_id}", response_model=ProductOut, response_model_exclude_unset=True)
async def get_product_api(product_id: int, db: Database = Depends(get_db)):
    logger.info("Get product", extra={"product_id": product_id})
    return await get_product(db, product_id)


@router.put("/{product_id}", response_model=ProductOut, response_model_exclude_unset=True)
async def update_product_api(
    product_id: int,
    payload: ProductUpdate,
    db: Database = Depends(get_db),
):
    logger.info("Update product", extra={"product_id": product_id, "stock": payload.stock})
    return await update_product(db, product_id, payload)


@router.delete("/{product_id}", response_model=MessageOut)
async def delete_product_api(product_id: int, db: Database = Depends(get_db)):
    logger.info("Delete product", extra={"product_id": product_id})
    return await delete_product(db, product_id)


@router.get(
    "/{product_id}/movements",
    response_model=List[StockMovementOut],
    response_model_exclude_unset=True,
)
async def list_product_movements_api(product_id: int, db: Database = Depends(get_db)):
    logger.info("List product movements", extra={"product_id": product_id})
    return await get_product_movements(db, product_id)
