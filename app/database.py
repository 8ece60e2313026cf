# app/database.py
from fastapi import Request
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from app.core.config import Settings
from app.repositories.memory_storage import MemStorage
from app.repositories.sql_storage import SqlStorage
from app.repositories.storage import Storage
from app.schemas.product import ProductCreate

# ---------------------------------------------------------
# Storage backends
#
# - memory : dicts in process memory, lost on restart (default)
# - sql    : SQLModel tables behind DATABASE_URL
#
# The store is built once in the app lifespan, kept on app.state and
# handed to routes through `get_storage`.
# ---------------------------------------------------------

SAMPLE_PRODUCTS: list[dict] = [
    {
        "name": "Wireless Bluetooth Headphones",
        "description": "Premium sound quality with active noise cancellation and 30-hour battery life.",
        "price": "129.99",
        "category": "Electronics",
        "image_url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300",
        "inventory": 25,
    },
    {
        "name": "Ergonomic Office Chair",
        "description": "Lumbar support and breathable mesh design for all-day comfort during work.",
        "price": "289.99",
        "category": "Furniture",
        "image_url": "https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300",
        "inventory": 15,
    },
    {
        "name": "Smartphone Pro Max",
        "description": "Latest flagship device with advanced camera system and lightning-fast performance.",
        "price": "999.99",
        "category": "Electronics",
        "image_url": "https://images.unsplash.com/photo-1511707171634-5f897ff02aa9?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300",
        "inventory": 12,
    },
    {
        "name": "Premium Coffee Maker",
        "description": "Programmable brewing system with built-in grinder for the perfect cup every time.",
        "price": "189.99",
        "category": "Kitchen",
        "image_url": "https://images.unsplash.com/photo-1495474472287-4d71bcdd2085?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300",
        "inventory": 8,
    },
    {
        "name": "Athletic Running Shoes",
        "description": "Lightweight design with responsive cushioning for optimal performance and comfort.",
        "price": "149.99",
        "category": "Sports",
        "image_url": "https://images.unsplash.com/photo-1542291026-7eec264c27ff?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300",
        "inventory": 30,
    },
    {
        "name": "Travel Backpack Pro",
        "description": "Durable and spacious design with multiple compartments for organized travel.",
        "price": "79.99",
        "category": "Travel",
        "image_url": "https://images.unsplash.com/photo-1553062407-98eeb64c6a62?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300",
        "inventory": 20,
    },
]


def build_engine(db_url: str) -> Engine:
    """
    Create the SQLModel engine for the sql backend.

    SQLite needs `check_same_thread=False` because sync routes run in a
    threadpool; an in-memory SQLite URL also needs a single shared
    connection, otherwise every connection sees an empty database.
    """
    if db_url.startswith("sqlite"):
        in_memory = db_url in ("sqlite://", "sqlite:///:memory:")
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool if in_memory else None,
        )

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
    )


def build_storage(settings: Settings) -> Storage:
    """
    Construct the store selected by STORAGE_BACKEND.
    """
    if settings.STORAGE_BACKEND == "sql":
        storage = SqlStorage(build_engine(settings.DATABASE_URL))
        storage.create_tables()
        return storage
    return MemStorage()


def seed_sample_products(storage: Storage) -> int:
    """
    Insert the sample catalog into an empty store.

    Returns the number of products inserted (0 if the catalog was not empty).
    """
    if storage.get_products():
        return 0
    for data in SAMPLE_PRODUCTS:
        storage.create_product(ProductCreate(**data))
    return len(SAMPLE_PRODUCTS)


def get_storage(request: Request) -> Storage:
    """
    FastAPI dependency that returns the store built at startup.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(storage: Storage = Depends(get_storage)):
            ...
    """
    return request.app.state.storage
