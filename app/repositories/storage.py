# app/repositories/storage.py
from abc import ABC, abstractmethod
from typing import Any

from app.models.cart import CartItem
from app.models.order import Order
from app.models.product import Product
from app.models.user import User
from app.schemas.cart import CartItemCreate, CartItemWithProduct
from app.schemas.order import OrderCreate
from app.schemas.product import ProductCreate


class Storage(ABC):
    """
    Data access layer for every storefront entity.

    Contract shared by all backends:
      - get_* returns None for a missing id, never raises.
      - update_* merges the given fields shallowly, None if the id is missing.
      - delete_* / remove_* return whether a row existed.
      - No FastAPI, no HTTP, no business logic.
    """

    # ----- Users -----

    @abstractmethod
    def get_user(self, user_id: str) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def create_user(self, username: str, password: str) -> User: ...

    # ----- Products -----

    @abstractmethod
    def get_products(self) -> list[Product]: ...

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None: ...

    @abstractmethod
    def create_product(self, data: ProductCreate) -> Product: ...

    @abstractmethod
    def update_product(self, product_id: str, updates: dict[str, Any]) -> Product | None: ...

    @abstractmethod
    def delete_product(self, product_id: str) -> bool: ...

    @abstractmethod
    def search_products(self, query: str) -> list[Product]:
        """
        Case-insensitive substring match on name, description or category.
        A blank query matches nothing.
        """

    @abstractmethod
    def get_products_by_category(self, category: str) -> list[Product]:
        """Case-insensitive exact match on category."""

    # ----- Orders -----

    @abstractmethod
    def get_orders(self) -> list[Order]: ...

    @abstractmethod
    def get_order(self, order_id: str) -> Order | None: ...

    @abstractmethod
    def create_order(self, data: OrderCreate) -> Order: ...

    @abstractmethod
    def update_order_status(self, order_id: str, status: str) -> Order | None: ...

    # ----- Cart -----

    @abstractmethod
    def get_cart_item(self, item_id: str) -> CartItem | None: ...

    @abstractmethod
    def get_cart_items(self, session_id: str) -> list[CartItemWithProduct]:
        """
        Lines of one session joined with their products.
        Lines whose product no longer exists are skipped.
        """

    @abstractmethod
    def add_to_cart(self, session_id: str, data: CartItemCreate) -> CartItem:
        """
        Insert a line, or add to the quantity of the session's existing
        line for the same product.
        """

    @abstractmethod
    def update_cart_item_quantity(self, item_id: str, quantity: int) -> CartItem | None:
        """
        Set the quantity of a line. A quantity <= 0 deletes the line and
        returns None.
        """

    @abstractmethod
    def remove_from_cart(self, item_id: str) -> bool: ...

    @abstractmethod
    def clear_cart(self, session_id: str) -> bool:
        """Delete every line of the session. Always True."""


def join_cart_line(item: CartItem, product: Product) -> CartItemWithProduct:
    return CartItemWithProduct.model_validate(
        {**item.model_dump(), "product": product.model_dump()}
    )


def matches_query(product: Product, query: str) -> bool:
    needle = query.lower()
    return (
        needle in product.name.lower()
        or needle in product.description.lower()
        or needle in product.category.lower()
    )
