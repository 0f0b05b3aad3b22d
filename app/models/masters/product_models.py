from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Product(Base, TimestampMixin):
    __tablename__ = "productos"

    id = Column(Integer, primary_key=True)
    nombre = Column(String(255), nullable=False)
    sku = Column(String(100), nullable=False, unique=True, index=True)
    descripcion = Column(Text, nullable=True)
    categoria_id = Column(Integer, ForeignKey("categorias.id", ondelete="SET NULL"), nullable=True, index=True)
    proveedor_id = Column(Integer, ForeignKey("proveedores.id", ondelete="SET NULL"), nullable=True, index=True)
    precio = Column(Numeric(12, 2), nullable=False)
    inventario = Column(Integer, nullable=False, server_default="0")
    inventario_minimo = Column(Integer, nullable=False, server_default="0")
    url_imagen = Column(Text, nullable=True)

    __table_args__ = (Index("ix_productos_creado_en", "creado_en"),)

    def __repr__(self):
        return f"<Product id={self.id} sku={self.sku} nombre={self.nombre}>"
