from sqlalchemy import insert, select

from app.core.db import Database, QueryExecutor
from app.constants.inventory_movement_type import (
    ADJUSTMENT_NOTE,
    INITIAL_STOCK_NOTE,
    StorageMovementType,
)
from app.mappers.field_maps import map_movement
from app.models.inventory.stock_movement_models import StockMovement
from app.models.masters.product_models import Product
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def record_movement(
    tx: QueryExecutor,
    *,
    product_id: int,
    quantity: int,
    movement_type: StorageMovementType,
    notes: str,
) -> dict:
    # Runs on the caller's transaction; never commits on its own.
    result = await tx.execute(
        insert(StockMovement)
        .values(
            producto_id=product_id,
            cantidad=quantity,
            tipo_movimiento=movement_type.value,
            notas=notes,
        )
        .returning(*StockMovement.__table__.c)
    )

    logger.info(
        "Stock movement recorded",
        extra={
            "product_id": product_id,
            "quantity": quantity,
            "movement_type": movement_type.value,
        },
    )
    return map_movement(result.first())


async def record_initial_stock(tx: QueryExecutor, *, product_id: int, stock: int) -> dict:
    return await record_movement(
        tx,
        product_id=product_id,
        quantity=stock,
        movement_type=StorageMovementType.ENTRADA,
        notes=INITIAL_STOCK_NOTE,
    )


async def record_stock_change(
    tx: QueryExecutor,
    *,
    product_id: int,
    previous_stock: int,
    new_stock: int,
):
    """Append an adjustment movement for ``new_stock - previous_stock``.

    Returns the mapped movement, or ``None`` when the stock did not change.
    """
    delta = new_stock - previous_stock
    if delta == 0:
        return None

    return await record_movement(
        tx,
        product_id=product_id,
        quantity=delta,
        movement_type=(
            StorageMovementType.ENTRADA if delta > 0 else StorageMovementType.SALIDA
        ),
        notes=ADJUSTMENT_NOTE,
    )


def movements_with_product_name():
    return (
        select(
            *StockMovement.__table__.c,
            Product.nombre.label("product_name"),
        )
        .select_from(StockMovement)
        .outerjoin(Product, StockMovement.producto_id == Product.id)
    )


async def list_product_movements(db: Database, product_id: int) -> list:
    result = await db.execute(
        movements_with_product_name()
        .where(StockMovement.producto_id == product_id)
        .order_by(StockMovement.creado_en.desc(), StockMovement.id.desc())
    )
    return [map_movement(r) for r in result.rows]
