# app/services/masters/product_service.py

from sqlalchemy import select, insert, update, delete

from app.core.db import Database
from app.core.exceptions import AppException, DatabaseError, is_unique_violation
from app.constants.error_codes import ErrorCode
from app.mappers.field_maps import PRODUCT_FIELDS, map_product, storage_values
from app.models.masters.category_models import Category
from app.models.masters.product_models import Product
from app.models.masters.supplier_models import Supplier
from app.schemas.masters.product_schemas import ProductCreate, ProductUpdate
from app.services.inventory.stock_movement_service import (
    list_product_movements,
    record_initial_stock,
    record_stock_change,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)

PRODUCT_COLUMNS = tuple(Product.__table__.c)


def _not_found() -> AppException:
    return AppException(404, "Product not found", ErrorCode.PRODUCT_NOT_FOUND)


def _sku_exists() -> AppException:
    return AppException(
        400,
        "A product with this SKU already exists",
        ErrorCode.PRODUCT_SKU_EXISTS,
    )


def _with_names():
    return (
        select(
            *PRODUCT_COLUMNS,
            Category.nombre.label("category_name"),
            Supplier.nombre.label("supplier_name"),
        )
        .select_from(Product)
        .outerjoin(Category, Product.categoria_id == Category.id)
        .outerjoin(Supplier, Product.proveedor_id == Supplier.id)
    )


# ---------------- LIST ----------------
async def list_products(db: Database) -> list:
    try:
        result = await db.execute(
            _with_names().order_by(Product.creado_en.desc(), Product.id.desc())
        )
    except DatabaseError as exc:
        logger.exception("List products failed")
        raise AppException(
            500,
            "Could not fetch products",
            ErrorCode.INTERNAL_ERROR,
            details=exc.message,
        )

    return [map_product(r) for r in result.rows]


# ---------------- GET ----------------
async def get_product(db: Database, product_id: int) -> dict:
    try:
        result = await db.execute(_with_names().where(Product.id == product_id))
    except DatabaseError as exc:
        logger.exception("Get product failed", extra={"product_id": product_id})
        raise AppException(
            500,
            "Could not fetch product",
            ErrorCode.INTERNAL_ERROR,
            details=exc.message,
        )

    row = result.first()
    if row is None:
        raise _not_found()
    return map_product(row)


# ---------------- CREATE ----------------
async def create_product(db: Database, payload: ProductCreate) -> dict:
    values = storage_values(payload.model_dump(exclude_unset=True), PRODUCT_FIELDS)

    try:
        async with db.transaction() as tx:
            result = await tx.execute(
                insert(Product).values(**values).returning(*PRODUCT_COLUMNS)
            )
            row = result.first()

            await record_initial_stock(
                tx,
                product_id=row["id"],
                stock=row["inventario"],
            )
    except DatabaseError as exc:
        if is_unique_violation(exc):
            raise _sku_exists()
        logger.exception("Create product failed", extra={"sku": payload.sku})
        raise AppException(500, "Could not create product", ErrorCode.INTERNAL_ERROR)

    return map_product(row)


# ---------------- UPDATE ----------------
async def update_product(db: Database, product_id: int, payload: ProductUpdate) -> dict:
    # PUT replaces every mutable column
    values = storage_values(payload.model_dump(), PRODUCT_FIELDS)

    try:
        async with db.transaction() as tx:
            current = await tx.execute(
                select(Product.inventario).where(Product.id == product_id)
            )
            if current.first() is None:
                raise _not_found()
            previous_stock = current.scalar()

            result = await tx.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(**values)
                .returning(*PRODUCT_COLUMNS)
            )
            row = result.first()
            if row is None:
                raise _not_found()

            await record_stock_change(
                tx,
                product_id=product_id,
                previous_stock=previous_stock,
                new_stock=row["inventario"],
            )
    except DatabaseError as exc:
        if is_unique_violation(exc):
            raise _sku_exists()
        logger.exception("Update product failed", extra={"product_id": product_id})
        raise AppException(500, "Could not update product", ErrorCode.INTERNAL_ERROR)

    return map_product(row)


# ---------------- DELETE ----------------
async def delete_product(db: Database, product_id: int) -> dict:
    try:
        result = await db.execute(
            delete(Product).where(Product.id == product_id).returning(Product.id)
        )
    except DatabaseError:
        logger.exception("Delete product failed", extra={"product_id": product_id})
        raise AppException(500, "Could not delete product", ErrorCode.INTERNAL_ERROR)

    if result.first() is None:
        raise _not_found()
    return {"message": "Product deleted successfully"}


# ---------------- MOVEMENTS ----------------
async def get_product_movements(db: Database, product_id: int) -> list:
    try:
        exists = await db.execute(select(Product.id).where(Product.id == product_id))
        if exists.first() is None:
            raise _not_found()
        return await list_product_movements(db, product_id)
    except DatabaseError:
        logger.exception("List movements failed", extra={"product_id": product_id})
        raise AppException(
            500,
            "Could not fetch stock movements",
            ErrorCode.INTERNAL_ERROR,
        )
