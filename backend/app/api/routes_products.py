from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.errors import ValidationError
from app.repositories.product_repo import ProductRepository
from app.schemas.product_schema import (
    ProductOut,
    validate_product_create,
    validate_product_update,
)

router = APIRouter(tags=["products"])


def _out(p) -> dict:
    return ProductOut.model_validate(p).model_dump(mode="json")


@router.post("", status_code=201, summary="Create product")
def create_product(payload: Any = Body(None), db: Session = Depends(get_db)):
    """
    payload: { "name": "Widget", "price": 10.5, "stock": 3 }
    """
    result = validate_product_create(payload)
    if not result.ok:
        raise ValidationError(result.message, result.errors)
    return _out(ProductRepository(db).create(result.value))


@router.get("", summary="List products")
def list_products(db: Session = Depends(get_db)):
    return [_out(p) for p in ProductRepository(db).list()]


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Session = Depends(get_db)):
    return _out(ProductRepository(db).get(product_id))


@router.put("/{product_id}", summary="Partially update product")
def update_product(product_id: str, payload: Any = Body(None), db: Session = Depends(get_db)):
    """
    payload: any subset of { "name", "price", "stock" }
    """
    result = validate_product_update(payload)
    if not result.ok:
        raise ValidationError(result.message, result.errors)
    return _out(ProductRepository(db).update(product_id, result.value))


@router.delete("/{product_id}", summary="Delete product")
def delete_product(product_id: str, db: Session = Depends(get_db)):
    return ProductRepository(db).delete(product_id)
