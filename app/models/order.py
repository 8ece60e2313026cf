# app/models/order.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order.

    `items` is a JSON snapshot of the cart lines at checkout time
    (productId, name, price, quantity), independent of later catalog edits.
    """

    __tablename__ = "orders"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True,
    )

    customer_name: str = Field(
        description="Name given at checkout",
    )
    customer_email: str = Field(
        description="Contact email given at checkout",
    )

    items: str = Field(
        description="Serialized list of ordered lines",
    )

    total: str = Field(
        description="Order total as a decimal string",
    )

    # Free text; the storefront uses pending | confirmed | shipped | delivered
    status: str = Field(
        default="pending",
        index=True,
        description="Order status",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
