# app/models/product.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Fields:
      - id, name, description, price, category, image_url,
        in_stock, inventory, created_at

    `in_stock` is advisory and may drift from `inventory`; use
    `is_purchasable()` when deciding whether the product can be sold.
    """

    __tablename__ = "products"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True,
    )

    name: str = Field(
        index=True,
        description="Display name of the product",
    )

    description: str = Field(
        description="Long description shown on the product card",
    )

    # Always formatted with 2 decimals, e.g. "129.99"
    price: str = Field(
        description="Unit price as a decimal string",
    )

    category: str = Field(
        index=True,
        description="Free-text category label, matched case-insensitively",
    )

    image_url: str = Field(
        description="Product image URL",
    )

    in_stock: bool = Field(
        default=True,
        description="Whether the product is flagged as available",
    )

    inventory: int = Field(
        default=0,
        ge=0,
        description="How many units are on hand",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    def is_purchasable(self) -> bool:
        return self.in_stock and self.inventory > 0
