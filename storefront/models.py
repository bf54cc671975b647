"""
Pydantic Models - Records exchanged with the catalog and checkout.

The cart only consumes a minimal product record; catalog-only
fields are ignored.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from storefront.services.money import parse_decimal


class ProductRecord(BaseModel):
    """Product data the cart copies at add time."""
    id: str = Field(min_length=1)
    name: str
    price: Decimal = Field(ge=0)
    image: str = ""

    class Config:
        extra = "ignore"  # Catalog sends category, badges, etc.

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # Catalog ids may be numeric
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        try:
            return parse_decimal(v)
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"invalid price: {v!r}") from e

    @field_validator("image", mode="before")
    @classmethod
    def none_image(cls, v):
        return "" if v is None else v


class CustomerInfo(BaseModel):
    """Optional customer details included in the order summary."""
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    class Config:
        extra = "ignore"

    @field_validator("name", "phone", "address", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v
