from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Generic, List, Optional, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

T = TypeVar("T")

# stock is a 32-bit INTEGER column on both engines
MAX_STOCK = 2_147_483_647


def _as_price(value: Any) -> Any:
    # bools are ints in Python but not prices; strings are not accepted either
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("price must be a number")
    return Decimal(str(value))


class ProductCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: StrictStr = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, allow_inf_nan=False)
    stock: StrictInt = Field(..., ge=0, le=MAX_STOCK)

    @field_validator("price", mode="before")
    @classmethod
    def _check_price(cls, v):
        return _as_price(v)


class ProductUpdate(BaseModel):
    """Partial update: only fields present in the body are applied."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[StrictStr] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(
        None, ge=0, max_digits=10, decimal_places=2, allow_inf_nan=False
    )
    stock: Optional[StrictInt] = Field(None, ge=0, le=MAX_STOCK)

    @field_validator("name", "price", "stock", mode="before")
    @classmethod
    def _reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} may not be null")
        if info.field_name == "price":
            return _as_price(v)
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float
    stock: int
    created_at: datetime
    updated_at: datetime

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_float(cls, v):
        return float(v) if isinstance(v, Decimal) else v

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive values; they are stored as UTC
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


@dataclass
class ValidationResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    errors: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


def _validate(model, payload: Any) -> ValidationResult:
    if not isinstance(payload, dict):
        return ValidationResult(ok=False, errors=["request body must be a JSON object"])
    try:
        return ValidationResult(ok=True, value=model.model_validate(payload))
    except pydantic.ValidationError as e:
        errors = []
        for err in e.errors():
            loc = ".".join(str(p) for p in err["loc"])
            msg = err["msg"]
            if err["type"] == "extra_forbidden":
                msg = "property should not exist"
            errors.append(f"{loc}: {msg}" if loc else msg)
        return ValidationResult(ok=False, errors=errors)


def validate_product_create(payload: Any) -> ValidationResult[ProductCreate]:
    return _validate(ProductCreate, payload)


def validate_product_update(payload: Any) -> ValidationResult[ProductUpdate]:
    return _validate(ProductUpdate, payload)
