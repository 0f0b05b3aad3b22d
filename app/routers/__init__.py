# app/routers/__init__.py

from .masters.product_router import router as product_router
from .masters.category_router import router as category_router
from .masters.supplier_router import router as supplier_router

from .inventory.stats_router import router as stats_router


__all__ = [
"product_router",
"category_router",
"supplier_router",

"stats_router",
]
