from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index, DateTime
from sqlalchemy.sql import func
from app.core.db import Base


class StockMovement(Base):
    __tablename__ = "movimientos_stock"

    id = Column(Integer, primary_key=True)
    producto_id = Column(Integer, ForeignKey("productos.id", ondelete="CASCADE"), nullable=False, index=True)
    cantidad = Column(Integer, nullable=False)
    tipo_movimiento = Column(String(20), nullable=False)
    notas = Column(Text, nullable=True)
    creado_en = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (Index("ix_movimientos_stock_creado_en", "creado_en"),)

    def __repr__(self):
        return f"<StockMovement id={self.id} producto_id={self.producto_id} qty={self.cantidad} tipo={self.tipo_movimiento}>"
