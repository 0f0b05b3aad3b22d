# app/mappers/field_maps.py

"""Storage row -> API object renaming.

Each entity has one declarative table of ``FieldSpec`` entries. ``map_row``
walks the table, so the rename contract lives only here.
"""

from typing import Any, Callable, Mapping, NamedTuple, Optional

from app.constants.inventory_movement_type import movement_type_from_storage
from app.utils.decimal_utils import to_int, to_number


class FieldSpec(NamedTuple):
    storage: str
    api: str
    coerce: Optional[Callable[[Any], Any]] = None
    # joined / derived columns, emitted only when the row carries them
    optional: bool = False


def _movement_type(value):
    return movement_type_from_storage(value).value


PRODUCT_FIELDS = (
    FieldSpec("id", "id"),
    FieldSpec("nombre", "name"),
    FieldSpec("sku", "sku"),
    FieldSpec("descripcion", "description"),
    FieldSpec("categoria_id", "category_id"),
    FieldSpec("proveedor_id", "supplier_id"),
    FieldSpec("precio", "price", to_number),
    FieldSpec("inventario", "stock", to_int),
    FieldSpec("inventario_minimo", "min_stock", to_int),
    FieldSpec("url_imagen", "image_url"),
    FieldSpec("creado_en", "created_at"),
    FieldSpec("actualizado_en", "updated_at"),
    FieldSpec("category_name", "category_name", optional=True),
    FieldSpec("supplier_name", "supplier_name", optional=True),
)

CATEGORY_FIELDS = (
    FieldSpec("id", "id"),
    FieldSpec("nombre", "name"),
    FieldSpec("descripcion", "description"),
    FieldSpec("creado_en", "created_at"),
    FieldSpec("actualizado_en", "updated_at"),
    FieldSpec("product_count", "product_count", to_int, optional=True),
)

SUPPLIER_FIELDS = (
    FieldSpec("id", "id"),
    FieldSpec("nombre", "name"),
    FieldSpec("email", "email"),
    FieldSpec("telefono", "phone"),
    FieldSpec("direccion", "address"),
    FieldSpec("creado_en", "created_at"),
    FieldSpec("actualizado_en", "updated_at"),
    FieldSpec("product_count", "product_count", to_int, optional=True),
)

MOVEMENT_FIELDS = (
    FieldSpec("id", "id"),
    FieldSpec("producto_id", "product_id"),
    FieldSpec("cantidad", "quantity", to_int),
    FieldSpec("tipo_movimiento", "movement_type", _movement_type),
    FieldSpec("notas", "notes"),
    FieldSpec("creado_en", "created_at"),
    FieldSpec("product_name", "product_name", optional=True),
)


def map_row(row: Mapping[str, Any], fields) -> dict:
    out = {}
    for spec in fields:
        if spec.storage not in row:
            if spec.optional:
                continue
            out[spec.api] = None
            continue
        value = row[spec.storage]
        out[spec.api] = spec.coerce(value) if spec.coerce else value
    return out


def map_product(row: Mapping[str, Any]) -> dict:
    return map_row(row, PRODUCT_FIELDS)


def map_category(row: Mapping[str, Any]) -> dict:
    return map_row(row, CATEGORY_FIELDS)


def map_supplier(row: Mapping[str, Any]) -> dict:
    return map_row(row, SUPPLIER_FIELDS)


def map_movement(row: Mapping[str, Any]) -> dict:
    return map_row(row, MOVEMENT_FIELDS)


def storage_values(data: Mapping[str, Any], fields) -> dict:
    """Inverse rename for writes: API payload -> storage column values.

    Only writable columns are produced; identity, timestamps and
    joined/derived fields are never written from a payload.
    """
    readonly = {"id", "creado_en", "actualizado_en"}
    return {
        spec.storage: data[spec.api]
        for spec in fields
        if spec.api in data and not spec.optional and spec.storage not in readonly
    }
