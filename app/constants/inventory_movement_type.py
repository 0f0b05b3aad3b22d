# app/constants/inventory_movement_type.py

from enum import Enum


class InventoryMovementType(str, Enum):
    """Movement kinds exposed by the API."""

    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"


class StorageMovementType(str, Enum):
    """Values persisted in ``movimientos_stock.tipo_movimiento``."""

    ENTRADA = "ENTRADA"
    SALIDA = "SALIDA"


# Closed table; anything not listed is reported as ADJUSTMENT.
# No write path currently produces an ADJUSTMENT row.
STORAGE_TO_API_MOVEMENT_TYPE = {
    StorageMovementType.ENTRADA.value: InventoryMovementType.IN,
    StorageMovementType.SALIDA.value: InventoryMovementType.OUT,
}

DEFAULT_API_MOVEMENT_TYPE = InventoryMovementType.ADJUSTMENT


def movement_type_from_storage(value) -> InventoryMovementType:
    return STORAGE_TO_API_MOVEMENT_TYPE.get(value, DEFAULT_API_MOVEMENT_TYPE)


INITIAL_STOCK_NOTE = "Initial stock"
ADJUSTMENT_NOTE = "Inventory adjustment"
