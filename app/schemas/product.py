# app/schemas/product.py
from datetime import datetime
from typing import Any

from pydantic import field_validator
from sqlmodel import Field

from app.schemas.base import CamelModel, format_money, not_blank


class ProductCreate(CamelModel):
    """
    Payload for creating a product (admin panel).

    - price may be sent as a number or a string; it is stored as "12.50".
    - in_stock defaults to True, inventory to 0.
    """

    name: str = Field(max_length=255)
    description: str
    price: str
    category: str = Field(
        max_length=100,
        description="Free-text category label",
    )
    image_url: str
    in_stock: bool = True
    inventory: int = Field(default=0, ge=0)

    @field_validator("name", "description", "category", "image_url")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("price", mode="before")
    @classmethod
    def normalize_price(cls, v: Any) -> str:
        return format_money(v)


class ProductRead(CamelModel):
    """
    Product representation for clients.
    """

    id: str
    name: str
    description: str
    price: str
    category: str
    image_url: str
    in_stock: bool
    inventory: int
    created_at: datetime


class ProductUpdate(CamelModel):
    """
    Partial update payload for products.
    All fields are optional; only the ones sent are replaced.
    A field that is sent must carry a value: explicit nulls are rejected.
    """

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: str | None = None
    category: str | None = Field(default=None, max_length=100)
    image_url: str | None = None
    in_stock: bool | None = None
    inventory: int | None = Field(default=None, ge=0)

    @field_validator("*", mode="before")
    @classmethod
    def not_null(cls, v: Any) -> Any:
        # Defaults are not validated, so None here was sent by the client.
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("name", "description", "category", "image_url")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("price", mode="before")
    @classmethod
    def normalize_price(cls, v: Any) -> str:
        if v is None:
            raise ValueError("field cannot be null")
        return format_money(v)
