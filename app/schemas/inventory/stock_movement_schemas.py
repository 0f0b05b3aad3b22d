from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from app.constants.inventory_movement_type import InventoryMovementType


class StockMovementOut(BaseModel):
    id: int
    product_id: int
    quantity: Optional[int] = None
    movement_type: InventoryMovementType
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    product_name: Optional[str] = None
