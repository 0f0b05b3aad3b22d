from sqlalchemy import Column, Integer, String, Text
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Supplier(Base, TimestampMixin):
    __tablename__ = "proveedores"

    id = Column(Integer, primary_key=True)
    nombre = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    telefono = Column(String(50), nullable=True)
    direccion = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Supplier id={self.id} nombre={self.nombre}>"
