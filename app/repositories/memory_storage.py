# app/repositories/memory_storage.py
import threading
from functools import wraps
from typing import Any

from app.models.cart import CartItem
from app.models.order import Order
from app.models.product import Product
from app.models.user import User
from app.repositories.storage import Storage, join_cart_line, matches_query
from app.schemas.cart import CartItemCreate, CartItemWithProduct
from app.schemas.order import OrderCreate
from app.schemas.product import ProductCreate


def _locked(method):
    # Sync routes run in a threadpool; each store call must finish before
    # another one starts touching the same dicts.
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class MemStorage(Storage):
    """
    Process-memory backend: one dict per entity, keyed by id.

    Iteration follows insertion order. Nothing survives a restart.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.users: dict[str, User] = {}
        self.products: dict[str, Product] = {}
        self.orders: dict[str, Order] = {}
        self.cart_items: dict[str, CartItem] = {}

    # ----- Users -----

    @_locked
    def get_user(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    @_locked
    def get_user_by_username(self, username: str) -> User | None:
        return next(
            (u for u in self.users.values() if u.username == username),
            None,
        )

    @_locked
    def create_user(self, username: str, password: str) -> User:
        user = User(username=username, password=password)
        self.users[user.id] = user
        return user

    # ----- Products -----

    @_locked
    def get_products(self) -> list[Product]:
        return list(self.products.values())

    @_locked
    def get_product(self, product_id: str) -> Product | None:
        return self.products.get(product_id)

    @_locked
    def create_product(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        self.products[product.id] = product
        return product

    @_locked
    def update_product(self, product_id: str, updates: dict[str, Any]) -> Product | None:
        product = self.products.get(product_id)
        if product is None:
            return None
        for field, value in updates.items():
            setattr(product, field, value)
        return product

    @_locked
    def delete_product(self, product_id: str) -> bool:
        return self.products.pop(product_id, None) is not None

    @_locked
    def search_products(self, query: str) -> list[Product]:
        if not query.strip():
            return []
        return [p for p in self.products.values() if matches_query(p, query)]

    @_locked
    def get_products_by_category(self, category: str) -> list[Product]:
        wanted = category.lower()
        return [p for p in self.products.values() if p.category.lower() == wanted]

    # ----- Orders -----

    @_locked
    def get_orders(self) -> list[Order]:
        return list(self.orders.values())

    @_locked
    def get_order(self, order_id: str) -> Order | None:
        return self.orders.get(order_id)

    @_locked
    def create_order(self, data: OrderCreate) -> Order:
        order = Order(**data.model_dump())
        self.orders[order.id] = order
        return order

    @_locked
    def update_order_status(self, order_id: str, status: str) -> Order | None:
        order = self.orders.get(order_id)
        if order is None:
            return None
        order.status = status
        return order

    # ----- Cart -----

    @_locked
    def get_cart_item(self, item_id: str) -> CartItem | None:
        return self.cart_items.get(item_id)

    @_locked
    def get_cart_items(self, session_id: str) -> list[CartItemWithProduct]:
        lines: list[CartItemWithProduct] = []
        for item in self.cart_items.values():
            if item.session_id != session_id:
                continue
            product = self.products.get(item.product_id)
            if product is not None:
                lines.append(join_cart_line(item, product))
        return lines

    def _find_line(self, session_id: str, product_id: str) -> CartItem | None:
        return next(
            (
                it
                for it in self.cart_items.values()
                if it.session_id == session_id and it.product_id == product_id
            ),
            None,
        )

    @_locked
    def add_to_cart(self, session_id: str, data: CartItemCreate) -> CartItem:
        existing = self._find_line(session_id, data.product_id)
        if existing:
            existing.quantity += data.quantity
            return existing

        item = CartItem(
            session_id=session_id,
            product_id=data.product_id,
            quantity=data.quantity,
        )
        self.cart_items[item.id] = item
        return item

    @_locked
    def update_cart_item_quantity(self, item_id: str, quantity: int) -> CartItem | None:
        item = self.cart_items.get(item_id)
        if item is None:
            return None
        if quantity <= 0:
            del self.cart_items[item_id]
            return None
        item.quantity = quantity
        return item

    @_locked
    def remove_from_cart(self, item_id: str) -> bool:
        return self.cart_items.pop(item_id, None) is not None

    @_locked
    def clear_cart(self, session_id: str) -> bool:
        for item_id in [k for k, it in self.cart_items.items() if it.session_id == session_id]:
            del self.cart_items[item_id]
        return True
