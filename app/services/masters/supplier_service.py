from sqlalchemy import select, insert, update, delete, func

from app.core.db import Database
from app.core.exceptions import AppException, DatabaseError
from app.constants.error_codes import ErrorCode
from app.mappers.field_maps import SUPPLIER_FIELDS, map_supplier, storage_values
from app.models.masters.product_models import Product
from app.models.masters.supplier_models import Supplier
from app.schemas.masters.supplier_schemas import SupplierCreate, SupplierUpdate
from app.utils.logger import get_logger

logger = get_logger(__name__)

SUPPLIER_COLUMNS = tuple(Supplier.__table__.c)


def _not_found() -> AppException:
    return AppException(404, "Supplier not found", ErrorCode.SUPPLIER_NOT_FOUND)


def _with_product_count():
    return (
        select(*SUPPLIER_COLUMNS, func.count(Product.id).label("product_count"))
        .select_from(Supplier)
        .outerjoin(Product, Product.proveedor_id == Supplier.id)
        .group_by(Supplier.id)
    )


# =========================
# LIST / GET
# =========================
async def list_suppliers(db: Database) -> list:
    try:
        result = await db.execute(_with_product_count().order_by(Supplier.nombre.asc()))
    except DatabaseError:
        logger.exception("List suppliers failed")
        raise AppException(500, "Could not fetch suppliers", ErrorCode.INTERNAL_ERROR)

    return [map_supplier(r) for r in result.rows]


async def get_supplier(db: Database, supplier_id: int) -> dict:
    try:
        result = await db.execute(_with_product_count().where(Supplier.id == supplier_id))
    except DatabaseError:
        logger.exception("Get supplier failed", extra={"supplier_id": supplier_id})
        raise AppException(500, "Could not fetch supplier", ErrorCode.INTERNAL_ERROR)

    row = result.first()
    if row is None:
        raise _not_found()
    return map_supplier(row)


# =========================
# CREATE / UPDATE
# =========================
# Supplier names are not unique, so there is no conflict case here.
async def create_supplier(db: Database, payload: SupplierCreate) -> dict:
    values = storage_values(payload.model_dump(exclude_unset=True), SUPPLIER_FIELDS)
    try:
        result = await db.execute(
            insert(Supplier).values(**values).returning(*SUPPLIER_COLUMNS)
        )
    except DatabaseError:
        logger.exception("Create supplier failed", extra={"supplier_name": payload.name})
        raise AppException(500, "Could not create supplier", ErrorCode.INTERNAL_ERROR)

    return map_supplier(result.first())


async def update_supplier(db: Database, supplier_id: int, payload: SupplierUpdate) -> dict:
    values = storage_values(payload.model_dump(), SUPPLIER_FIELDS)
    try:
        result = await db.execute(
            update(Supplier)
            .where(Supplier.id == supplier_id)
            .values(**values)
            .returning(*SUPPLIER_COLUMNS)
        )
    except DatabaseError:
        logger.exception("Update supplier failed", extra={"supplier_id": supplier_id})
        raise AppException(500, "Could not update supplier", ErrorCode.INTERNAL_ERROR)

    row = result.first()
    if row is None:
        raise _not_found()
    return map_supplier(row)


# =========================
# DELETE
# =========================
async def delete_supplier(db: Database, supplier_id: int) -> dict:
    try:
        result = await db.execute(
            delete(Supplier).where(Supplier.id == supplier_id).returning(Supplier.id)
        )
    except DatabaseError:
        logger.exception("Delete supplier failed", extra={"supplier_id": supplier_id})
        raise AppException(500, "Could not delete supplier", ErrorCode.INTERNAL_ERROR)

    if result.first() is None:
        raise _not_found()
    return {"message": "Supplier deleted successfully"}
