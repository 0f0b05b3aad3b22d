from typing import List

from fastapi import APIRouter, Depends

from app.core.db import Database, get_db
from app.schemas.masters.common_schemas import MessageOut
from app.schemas.masters.supplier_schemas import SupplierCreate, SupplierUpdate, SupplierOut
from app.services.masters.supplier_service import (
    create_supplier,
    list_suppliers,
    get_supplier,
    update_supplier,
    delete_supplier,
)
from app.utils.logger import get_logger

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])
logger = get_logger(__name__)


@router.get("", response_model=List[SupplierOut], response_model_exclude_unset=True)
async def list_suppliers_api(db: Database = Depends(get_db)):
    logger.info("List suppliers")
    return await list_suppliers(db)


@router.post("", response_model=SupplierOut, status_code=201, response_model_exclude_unset=True)
async def create_supplier_api(payload: SupplierCreate, db: Database = Depends(get_db)):
    logger.info(
        "Create supplier",
        extra={"supplier_name": payload.name, "email": payload.email},
    )
    return await create_supplier(db, payload)


@router.get("/{supplier_id}", response_model=SupplierOut, response_model_exclude_unset=True)
async def get_supplier_api(supplier_id: int, db: Database = Depends(get_db)):
    logger.info("Get supplier", extra={"supplier_id": supplier_id})
    return await get_supplier(db, supplier_id)


@router.put("/{supplier_id}", response_model=SupplierOut, response_model_exclude_unset=True)
async def update_supplier_api(
    supplier_id: int,
    payload: SupplierUpdate,
    db: Database = Depends(get_db),
):
    logger.info("Update supplier", extra={"supplier_id": supplier_id})
    return await update_supplier(db, supplier_id, payload)


@router.delete("/{supplier_id}", response_model=MessageOut)
async def delete_supplier_api(supplier_id: int, db: Database = Depends(get_db)):
    logger.info("Delete supplier", extra={"supplier_id": supplier_id})
    return await delete_supplier(db, supplier_id)
