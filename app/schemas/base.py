# app/schemas/base.py
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

CENT = Decimal("0.01")


class CamelModel(SQLModel):
    """
    Base for request/response schemas.

    JSON uses camelCase (`imageUrl`, `sessionId`, ...); Python code keeps
    snake_case. Incoming payloads may use either spelling.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def format_money(value: Any) -> str:
    """
    Normalize a price-like value to a 2-decimal string.

    Accepts numbers and numeric strings; rejects booleans, negatives,
    NaN/infinity and anything unparseable with ValueError.
    """
    if isinstance(value, bool):
        raise ValueError("amount must be a number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError("amount must be a number")
    if not amount.is_finite():
        raise ValueError("amount must be a finite number")
    if amount < 0:
        raise ValueError("amount cannot be negative")
    return str(amount.quantize(CENT, rounding=ROUND_HALF_UP))


def not_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v
