from sqlalchemy import Column, Integer, String, Text
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    __tablename__ = "categorias"

    id = Column(Integer, primary_key=True)
    nombre = Column(String(255), nullable=False, unique=True, index=True)
    descripcion = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Category id={self.id} nombre={self.nombre}>"
