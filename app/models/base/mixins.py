from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class TimestampMixin:
    creado_en = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    actualizado_en = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )
