# app/services/inventory/stats_service.py

from datetime import timedelta

from sqlalchemy import case, func, select

from app.core.db import Database, QueryExecutor
from app.core.exceptions import AppException, DatabaseError
from app.constants.error_codes import ErrorCode
from app.constants.inventory_movement_type import StorageMovementType
from app.mappers.field_maps import map_movement
from app.models.inventory.stock_movement_models import StockMovement
from app.models.masters.category_models import Category
from app.models.masters.product_models import Product
from app.models.masters.supplier_models import Supplier
from app.services.inventory.stock_movement_service import movements_with_product_name
from app.utils.date_utils import short_date_label
from app.utils.decimal_utils import to_int, to_number
from app.utils.logger import get_logger

logger = get_logger(__name__)

RECENT_MOVEMENTS_LIMIT = 10
TREND_WINDOW_DAYS = 7


async def _count(tx: QueryExecutor, stmt) -> int:
    return to_int((await tx.execute(stmt)).scalar()) or 0


async def _stock_trends(tx: QueryExecutor) -> list:
    # window is relative to the database clock, not the app server's
    now = (await tx.execute(select(func.now().label("now")))).scalar()
    since = now - timedelta(days=TREND_WINDOW_DAYS)

    day = func.date(StockMovement.creado_en)
    stmt = (
        select(
            day.label("fecha"),
            func.sum(
                case(
                    (
                        StockMovement.tipo_movimiento == StorageMovementType.ENTRADA.value,
                        StockMovement.cantidad,
                    ),
                    else_=0,
                )
            ).label("entradas"),
            func.sum(
                case(
                    (
                        StockMovement.tipo_movimiento == StorageMovementType.SALIDA.value,
                        func.abs(StockMovement.cantidad),
                    ),
                    else_=0,
                )
            ).label("salidas"),
        )
        .where(StockMovement.creado_en >= since)
        .group_by(day)
        .order_by(day.asc())
    )

    rows = (await tx.execute(stmt)).rows
    return [
        {
            "date": short_date_label(r["fecha"]),
            "in": to_int(r["entradas"]) or 0,
            "out": to_int(r["salidas"]) or 0,
        }
        for r in rows
    ]


async def get_stats(db: Database) -> dict:
    """Dashboard summary.

    Every query runs on one connection; if any of them fails the whole
    report fails, no partial result is returned.
    """
    try:
        async with db.transaction() as tx:
            total_products = await _count(tx, select(func.count(Product.id)))
            total_categories = await _count(tx, select(func.count(Category.id)))
            total_suppliers = await _count(tx, select(func.count(Supplier.id)))
            low_stock = await _count(
                tx,
                select(func.count(Product.id)).where(
                    Product.inventario < Product.inventario_minimo
                ),
            )

            stock_value = (
                await tx.execute(select(func.sum(Product.precio * Product.inventario)))
            ).scalar()

            recent = await tx.execute(
                movements_with_product_name()
                .order_by(StockMovement.creado_en.desc(), StockMovement.id.desc())
                .limit(RECENT_MOVEMENTS_LIMIT)
            )

            product_count = func.count(Product.id).label("value")
            distribution = await tx.execute(
                select(Category.nombre.label("name"), product_count)
                .select_from(Category)
                .outerjoin(Product, Product.categoria_id == Category.id)
                .group_by(Category.id, Category.nombre)
                .order_by(product_count.desc(), Category.nombre.asc())
            )

            trends = await _stock_trends(tx)

    except DatabaseError:
        logger.exception("Stats aggregation failed")
        raise AppException(500, "Could not fetch statistics", ErrorCode.INTERNAL_ERROR)

    return {
        "totalProducts": total_products,
        "totalCategories": total_categories,
        "totalSuppliers": total_suppliers,
        "lowStockProducts": low_stock,
        "totalStockValue": to_number(stock_value) or 0.0,
        "recentMovements": [map_movement(r) for r in recent.rows],
        "categoryDistribution": [
            {"name": r["name"], "value": to_int(r["value"]) or 0}
            for r in distribution.rows
        ],
        "stockTrends": trends,
    }
