# app/models/user.py
import uuid

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Storefront account.

    WARNING:
      - `password` is stored as given. No route authenticates against it;
        hash it before any login flow is added.
    """

    __tablename__ = "users"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True,
    )

    username: str = Field(
        unique=True,
        index=True,
    )

    password: str
