# app/schemas/inventory/stats_schemas.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List

from app.schemas.inventory.stock_movement_schemas import StockMovementOut


class CategoryShare(BaseModel):
    name: str
    value: int


class StockTrendPoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    in_: int = Field(alias="in")
    out: int


class StatsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(alias="totalProducts")
    total_categories: int = Field(alias="totalCategories")
    total_suppliers: int = Field(alias="totalSuppliers")
    low_stock_products: int = Field(alias="lowStockProducts")
    total_stock_value: float = Field(alias="totalStockValue")
    recent_movements: List[StockMovementOut] = Field(alias="recentMovements")
    category_distribution: List[CategoryShare] = Field(alias="categoryDistribution")
    stock_trends: List[StockTrendPoint] = Field(alias="stockTrends")
