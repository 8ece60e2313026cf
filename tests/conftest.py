import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import ExternalServiceError
from app.core.gemini_client import get_shopping_ai
from app.database import build_engine, get_storage
from app.main import app
from app.repositories.memory_storage import MemStorage
from app.repositories.sql_storage import SqlStorage
from app.schemas.chat import ShoppingIntent
from app.schemas.product import ProductCreate


def product_data(**overrides) -> ProductCreate:
    data = {
        "name": "Wireless Bluetooth Headphones",
        "description": "Premium sound quality with active noise cancellation.",
        "price": "129.99",
        "category": "Electronics",
        "image_url": "https://example.com/headphones.jpg",
    }
    data.update(overrides)
    return ProductCreate(**data)


class FakeAI:
    """
    Stand-in for the Gemini client. Records what it was asked to write about.
    """

    def __init__(
        self,
        intent: ShoppingIntent | None = None,
        reply: str = "Here is what I found!",
        fail_classify: bool = False,
        fail_generate: bool = False,
    ):
        self.intent = intent
        self.reply = reply
        self.fail_classify = fail_classify
        self.fail_generate = fail_generate
        self.generated: list[tuple] = []

    async def classify(self, message):
        if self.fail_classify:
            raise ExternalServiceError("classifier down")
        return self.intent or ShoppingIntent(intent="general")

    async def generate(self, message, intent, products):
        if self.fail_generate:
            raise ExternalServiceError("generator down")
        self.generated.append((message, intent, list(products)))
        return self.reply


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def memory_storage():
    return MemStorage()


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    if request.param == "memory":
        return MemStorage()
    sql = SqlStorage(build_engine("sqlite://"))
    sql.create_tables()
    return sql


@pytest.fixture
def fake_ai():
    return FakeAI()


@pytest.fixture
def client(memory_storage, fake_ai):
    app.dependency_overrides[get_storage] = lambda: memory_storage
    app.dependency_overrides[get_shopping_ai] = lambda: fake_ai
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
