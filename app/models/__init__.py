# Masters
from app.models.masters.category_models import Category
from app.models.masters.supplier_models import Supplier
from app.models.masters.product_models import Product

# Inventory
from app.models.inventory.stock_movement_models import StockMovement
