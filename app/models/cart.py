# app/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class CartItem(SQLModel, table=True):
    """
    Shopping cart entry for an anonymous session.
    One session cannot have 2 rows for the same product.

    `product_id` is a plain reference, not a foreign key: deleting a
    product leaves its cart rows behind and they are skipped on read.
    """

    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("session_id", "product_id"),)

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True,
    )

    session_id: str = Field(
        index=True,
        description="Client-chosen session token",
    )

    product_id: str = Field(
        index=True,
    )

    quantity: int = Field(
        default=1,
        gt=0,
        description="Must be >= 1",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
