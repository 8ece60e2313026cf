# app/schemas/cart.py
from datetime import datetime

from sqlmodel import Field

from app.schemas.base import CamelModel
from app.schemas.product import ProductRead


class CartItemCreate(CamelModel):
    """
    Payload for adding to cart. The session comes from `x-session-id`.
    """

    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, gt=0)


class CartItemUpdate(CamelModel):
    """
    Payload for updating quantity of a cart item.
    A quantity <= 0 removes the line.
    """

    quantity: int


class CartItemRead(CamelModel):
    id: str
    session_id: str
    product_id: str
    quantity: int
    created_at: datetime


class CartItemWithProduct(CartItemRead):
    """
    Cart line joined with its product at read time. Never stored.
    """

    product: ProductRead


class CartItemAdded(CamelModel):
    """
    Response for POST /cart: the created or merged row.
    """

    cart_item: CartItemRead
    session_id: str


class CartView(CamelModel):
    """
    Full cart response with derived totals.

    item_count and total are recomputed from the lines on every read.
    """

    items: list[CartItemWithProduct]
    session_id: str
    item_count: int
    total: str
