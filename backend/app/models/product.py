import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, Numeric, String

from app.db import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Product(Base):
    # table and column names match the generated schema definition
    __tablename__ = "Product"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    price = Column(
        Numeric(10, 2, asdecimal=False).with_variant(Float(), "sqlite"),
        nullable=False,
    )
    stock = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
