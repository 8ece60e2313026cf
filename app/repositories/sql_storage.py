# app/repositories/sql_storage.py
from typing import Any

from sqlalchemy import Engine, func, or_
from sqlmodel import Session, SQLModel, select

from app.models.cart import CartItem
from app.models.order import Order
from app.models.product import Product
from app.models.user import User
from app.repositories.storage import Storage, join_cart_line
from app.schemas.cart import CartItemCreate, CartItemWithProduct
from app.schemas.order import OrderCreate
from app.schemas.product import ProductCreate

# Creation order; id breaks timestamp ties.
PRODUCT_ORDER = (Product.created_at, Product.id)


class SqlStorage(Storage):
    """
    Durable backend over a SQLModel engine.

    Each call opens its own Session and commits before returning, so the
    returned rows are detached but fully loaded.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_tables(self) -> None:
        """
        Create all tables defined in SQLModel metadata if they do not exist.
        """
        SQLModel.metadata.create_all(self.engine)

    def _save(self, row: Any) -> Any:
        with Session(self.engine) as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return row

    # ----- Users -----

    def get_user(self, user_id: str) -> User | None:
        with Session(self.engine) as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with Session(self.engine) as session:
            stmt = select(User).where(User.username == username)
            return session.exec(stmt).first()

    def create_user(self, username: str, password: str) -> User:
        return self._save(User(username=username, password=password))

    # ----- Products -----

    def get_products(self) -> list[Product]:
        with Session(self.engine) as session:
            return list(session.exec(select(Product).order_by(*PRODUCT_ORDER)).all())

    def get_product(self, product_id: str) -> Product | None:
        with Session(self.engine) as session:
            return session.get(Product, product_id)

    def create_product(self, data: ProductCreate) -> Product:
        return self._save(Product(**data.model_dump()))

    def update_product(self, product_id: str, updates: dict[str, Any]) -> Product | None:
        with Session(self.engine) as session:
            product = session.get(Product, product_id)
            if not product:
                return None
            for field, value in updates.items():
                setattr(product, field, value)
            session.add(product)
            session.commit()
            session.refresh(product)
            return product

    def delete_product(self, product_id: str) -> bool:
        with Session(self.engine) as session:
            product = session.get(Product, product_id)
            if not product:
                return False
            session.delete(product)
            session.commit()
            return True

    def search_products(self, query: str) -> list[Product]:
        if not query.strip():
            return []
        needle = query.lower()
        stmt = (
            select(Product)
            .where(
                or_(
                    func.lower(Product.name).contains(needle, autoescape=True),
                    func.lower(Product.description).contains(needle, autoescape=True),
                    func.lower(Product.category).contains(needle, autoescape=True),
                )
            )
            .order_by(*PRODUCT_ORDER)
        )
        with Session(self.engine) as session:
            return list(session.exec(stmt).all())

    def get_products_by_category(self, category: str) -> list[Product]:
        stmt = (
            select(Product)
            .where(func.lower(Product.category) == category.lower())
            .order_by(*PRODUCT_ORDER)
        )
        with Session(self.engine) as session:
            return list(session.exec(stmt).all())

    # ----- Orders -----

    def get_orders(self) -> list[Order]:
        with Session(self.engine) as session:
            return list(session.exec(select(Order).order_by(Order.created_at, Order.id)).all())

    def get_order(self, order_id: str) -> Order | None:
        with Session(self.engine) as session:
            return session.get(Order, order_id)

    def create_order(self, data: OrderCreate) -> Order:
        return self._save(Order(**data.model_dump()))

    def update_order_status(self, order_id: str, status: str) -> Order | None:
        with Session(self.engine) as session:
            order = session.get(Order, order_id)
            if not order:
                return None
            order.status = status
            session.add(order)
            session.commit()
            session.refresh(order)
            return order

    # ----- Cart -----

    def get_cart_item(self, item_id: str) -> CartItem | None:
        with Session(self.engine) as session:
            return session.get(CartItem, item_id)

    def get_cart_items(self, session_id: str) -> list[CartItemWithProduct]:
        # Inner join: lines pointing at deleted products drop out here.
        stmt = (
            select(CartItem, Product)
            .join(Product, Product.id == CartItem.product_id)
            .where(CartItem.session_id == session_id)
            .order_by(CartItem.created_at, CartItem.id)
        )
        with Session(self.engine) as session:
            return [join_cart_line(item, product) for item, product in session.exec(stmt).all()]

    def add_to_cart(self, session_id: str, data: CartItemCreate) -> CartItem:
        with Session(self.engine) as session:
            stmt = select(CartItem).where(
                CartItem.session_id == session_id,
                CartItem.product_id == data.product_id,
            )
            item = session.exec(stmt).first()
            if item:
                item.quantity += data.quantity
            else:
                item = CartItem(
                    session_id=session_id,
                    product_id=data.product_id,
                    quantity=data.quantity,
                )
            session.add(item)
            session.commit()
            session.refresh(item)
            return item

    def update_cart_item_quantity(self, item_id: str, quantity: int) -> CartItem | None:
        with Session(self.engine) as session:
            item = session.get(CartItem, item_id)
            if not item:
                return None
            if quantity <= 0:
                session.delete(item)
                session.commit()
                return None
            item.quantity = quantity
            session.add(item)
            session.commit()
            session.refresh(item)
            return item

    def remove_from_cart(self, item_id: str) -> bool:
        with Session(self.engine) as session:
            item = session.get(CartItem, item_id)
            if not item:
                return False
            session.delete(item)
            session.commit()
            return True

    def clear_cart(self, session_id: str) -> bool:
        with Session(self.engine) as session:
            stmt = select(CartItem).where(CartItem.session_id == session_id)
            for row in session.exec(stmt).all():
                session.delete(row)
            session.commit()
        return True
