from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from app.errors import NotFoundError
from app.models.product import Product
from app.schemas.product_schema import ProductCreate, ProductUpdate
from app.utils.log import get_logger
from app.utils.transactions import write_transaction

log = get_logger("products")


def _column_values(data: dict) -> dict:
    values = dict(data)
    if isinstance(values.get("price"), Decimal):
        # both the Float (sqlite) and Numeric(10, 2) columns accept a float bind
        values["price"] = float(values["price"])
    return values


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: ProductCreate) -> Product:
        with write_transaction(self.db):
            p = Product(**_column_values(data.model_dump()))
            self.db.add(p)
            self.db.flush()
        self.db.refresh(p)
        log.info("Created product %s", p.id)
        return p

    def list(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.created_at).all()

    def get(self, product_id: str) -> Product:
        p = self.db.get(Product, product_id)
        if p is None:
            raise NotFoundError("Product not found")
        return p

    def update(self, product_id: str, data: ProductUpdate) -> Product:
        with write_transaction(self.db):
            p = self.get(product_id)
            for key, value in _column_values(data.changes()).items():
                setattr(p, key, value)
            p.updated_at = datetime.now(timezone.utc)
            self.db.flush()
        self.db.refresh(p)
        log.info("Updated product %s", product_id)
        return p

    def delete(self, product_id: str) -> dict:
        with write_transaction(self.db):
            p = self.get(product_id)
            self.db.delete(p)
        log.info("Deleted product %s", product_id)
        return {"deleted": True}
