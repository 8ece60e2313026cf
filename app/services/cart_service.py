# app/services/cart_service.py
from decimal import Decimal

from fastapi import HTTPException, status

from app.models.cart import CartItem
from app.repositories.storage import Storage
from app.schemas.base import format_money
from app.schemas.cart import (
    CartItemAdded,
    CartItemCreate,
    CartItemRead,
    CartItemWithProduct,
    CartView,
)


def cart_totals(items: list[CartItemWithProduct]) -> tuple[int, str]:
    """
    Derived cart figures: (sum of quantities, sum of price * quantity).
    """
    item_count = 0
    total = Decimal("0")
    for line in items:
        item_count += line.quantity
        total += Decimal(line.product.price) * line.quantity
    return item_count, format_money(total)


class CartService:
    """
    Business logic for session carts.

    Responsibilities:
      - bind the client session token to store calls
      - validate product existence on add
      - compute item count and total on every read
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def get_cart(self, session_id: str) -> CartView:
        items = self.storage.get_cart_items(session_id)
        item_count, total = cart_totals(items)
        return CartView(
            items=items,
            session_id=session_id,
            item_count=item_count,
            total=total,
        )

    def add_to_cart(self, session_id: str, payload: CartItemCreate) -> CartItemAdded:
        """
        Add a product to the session's cart.

        Adding a product that is already in the cart increases its quantity.
        """
        if not self.storage.get_product(payload.product_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        item = self.storage.add_to_cart(session_id, payload)
        return CartItemAdded(
            cart_item=CartItemRead.model_validate(item),
            session_id=session_id,
        )

    def update_quantity(self, item_id: str, quantity: int) -> CartItem | None:
        """
        Set a line's quantity.

        Returns None when quantity <= 0 removed the line.
        Raises 404 if the line does not exist.
        """
        # One store call per branch, so a concurrent delete still reads as 404.
        if quantity <= 0:
            self.remove_item(item_id)
            return None

        item = self.storage.update_cart_item_quantity(item_id, quantity)
        if item is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart item not found",
            )
        return item

    def remove_item(self, item_id: str) -> None:
        if not self.storage.remove_from_cart(item_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart item not found",
            )

    def clear_cart(self, session_id: str) -> None:
        self.storage.clear_cart(session_id)
