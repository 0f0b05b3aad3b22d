from sqlalchemy import select, insert, update, delete, func

from app.core.db import Database
from app.core.exceptions import AppException, DatabaseError, is_unique_violation
from app.constants.error_codes import ErrorCode
from app.mappers.field_maps import CATEGORY_FIELDS, map_category, storage_values
from app.models.masters.category_models import Category
from app.models.masters.product_models import Product
from app.schemas.masters.category_schemas import CategoryCreate, CategoryUpdate
from app.utils.logger import get_logger

logger = get_logger(__name__)

CATEGORY_COLUMNS = tuple(Category.__table__.c)


def _not_found() -> AppException:
    return AppException(404, "Category not found", ErrorCode.CATEGORY_NOT_FOUND)


def _name_exists() -> AppException:
    return AppException(
        400,
        "A category with this name already exists",
        ErrorCode.CATEGORY_NAME_EXISTS,
    )


def _with_product_count():
    return (
        select(*CATEGORY_COLUMNS, func.count(Product.id).label("product_count"))
        .select_from(Category)
        .outerjoin(Product, Product.categoria_id == Category.id)
        .group_by(Category.id)
    )


async def list_categories(db: Database) -> list:
    try:
        result = await db.execute(_with_product_count().order_by(Category.nombre.asc()))
    except DatabaseError:
        logger.exception("List categories failed")
        raise AppException(500, "Could not fetch categories", ErrorCode.INTERNAL_ERROR)

    return [map_category(r) for r in result.rows]


async def get_category(db: Database, category_id: int) -> dict:
    try:
        result = await db.execute(_with_product_count().where(Category.id == category_id))
    except DatabaseError:
        logger.exception("Get category failed", extra={"category_id": category_id})
        raise AppException(500, "Could not fetch category", ErrorCode.INTERNAL_ERROR)

    row = result.first()
    if row is None:
        raise _not_found()
    return map_category(row)


async def create_category(db: Database, payload: CategoryCreate) -> dict:
    values = storage_values(payload.model_dump(exclude_unset=True), CATEGORY_FIELDS)
    try:
        result = await db.execute(
            insert(Category).values(**values).returning(*CATEGORY_COLUMNS)
        )
    except DatabaseError as exc:
        if is_unique_violation(exc):
            raise _name_exists()
        logger.exception("Create category failed", extra={"category_name": payload.name})
        raise AppException(500, "Could not create category", ErrorCode.INTERNAL_ERROR)

    return map_category(result.first())


async def update_category(db: Database, category_id: int, payload: CategoryUpdate) -> dict:
    values = storage_values(payload.model_dump(), CATEGORY_FIELDS)
    try:
        result = await db.execute(
            update(Category)
            .where(Category.id == category_id)
            .values(**values)
            .returning(*CATEGORY_COLUMNS)
        )
    except DatabaseError as exc:
        if is_unique_violation(exc):
            raise _name_exists()
        logger.exception("Update category failed", extra={"category_id": category_id})
        raise AppException(500, "Could not update category", ErrorCode.INTERNAL_ERROR)

    row = result.first()
    if row is None:
        raise _not_found()
    return map_category(row)


async def delete_category(db: Database, category_id: int) -> dict:
    try:
        result = await db.execute(
            delete(Category).where(Category.id == category_id).returning(Category.id)
        )
    except DatabaseError:
        logger.exception("Delete category failed", extra={"category_id": category_id})
        raise AppException(500, "Could not delete category", ErrorCode.INTERNAL_ERROR)

    if result.first() is None:
        raise _not_found()
    return {"message": "Category deleted successfully"}
