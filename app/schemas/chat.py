# app/schemas/chat.py
from typing import Literal

from sqlmodel import Field

from app.schemas.base import CamelModel
from app.schemas.product import ProductRead

IntentName = Literal["search", "recommend", "add_to_cart", "get_info", "general"]


class PriceRange(CamelModel):
    """
    Budget extracted from a message. Bounds are inclusive; a missing
    bound is open.
    """

    min: float | None = None
    max: float | None = None


class ShoppingIntent(CamelModel):
    """
    Classified purpose of one chat message, plus extracted parameters.
    """

    intent: IntentName
    query: str | None = None
    category: str | None = None
    price_range: PriceRange | None = None
    product_id: str | None = None


class ChatRequest(CamelModel):
    message: str = Field(min_length=1)


class ChatResponse(CamelModel):
    """
    Assistant reply. `products` is only present when something matched.
    """

    response: str
    products: list[ProductRead] | None = None
    intent: ShoppingIntent
