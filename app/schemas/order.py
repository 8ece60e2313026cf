# app/schemas/order.py
import json
from datetime import datetime
from typing import Any

from pydantic import EmailStr, field_validator
from sqlmodel import Field

from app.schemas.base import CamelModel, format_money, not_blank


class OrderLine(CamelModel):
    """
    One line of the order snapshot.
    """

    product_id: str
    name: str
    price: str
    quantity: int = Field(gt=0)

    @field_validator("price", mode="before")
    @classmethod
    def normalize_price(cls, v: Any) -> str:
        return format_money(v)


class OrderCreate(CamelModel):
    """
    Payload for placing an order at checkout.

    `items` may be sent either as a list of lines or as the JSON string
    the storefront client produces; it is stored as a JSON string.
    """

    customer_name: str
    customer_email: EmailStr
    items: str
    total: str
    status: str = "pending"

    @field_validator("customer_name", "status")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("total", mode="before")
    @classmethod
    def normalize_total(cls, v: Any) -> str:
        return format_money(v)

    @field_validator("items", mode="before")
    @classmethod
    def serialize_items(cls, v: Any) -> str:
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError:
                raise ValueError("items must be valid JSON")
        if not isinstance(v, list) or not v:
            raise ValueError("items must be a non-empty list")

        lines = [OrderLine.model_validate(line) for line in v]
        return json.dumps([line.model_dump(by_alias=True) for line in lines])


class OrderRead(CamelModel):
    id: str
    customer_name: str
    customer_email: str
    items: str
    total: str
    status: str
    created_at: datetime


class OrderStatusUpdate(CamelModel):
    """
    Admin payload to change order status.
    """

    status: str

    @field_validator("status")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return not_blank(v)
