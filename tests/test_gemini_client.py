import json

import httpx
import pytest

from app.core.config import Settings
from app.core.exceptions import ExternalServiceError
from app.core.gemini_client import EMPTY_REPLY, GeminiClient, build_reply_context
from app.models.product import Product
from app.schemas.chat import ShoppingIntent

pytestmark = pytest.mark.anyio


def gemini_answer(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def make_client(handler, api_key: str | None = "test-key") -> GeminiClient:
    settings = Settings().model_copy(update={"GEMINI_API_KEY": api_key})
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiClient(settings, http)


def headphones() -> Product:
    return Product(
        id="prod-123",
        name="Wireless Bluetooth Headphones",
        description="Noise cancelling.",
        price="129.99",
        category="Electronics",
        image_url="https://example.com/h.jpg",
        inventory=25,
    )


async def test_classify_parses_the_json_answer():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["key"] = request.headers["x-goog-api-key"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json=gemini_answer(
                '{"intent": "search", "query": "headphones", "priceRange": {"min": 0, "max": 150}}'
            ),
        )

    intent = await make_client(handler).classify("headphones under 150")

    assert intent.intent == "search"
    assert intent.query == "headphones"
    assert intent.price_range.max == 150
    assert seen["key"] == "test-key"
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "headphones under 150"
    assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"


@pytest.mark.parametrize(
    "text",
    ["not json", "", '{"intent": "dance"}', '{"query": "no intent"}'],
)
async def test_classify_rejects_unusable_answers(text):
    client = make_client(lambda request: httpx.Response(200, json=gemini_answer(text)))

    with pytest.raises(ExternalServiceError):
        await client.classify("hi")


async def test_error_status_raises():
    client = make_client(lambda request: httpx.Response(503, json={"error": "busy"}))

    with pytest.raises(ExternalServiceError):
        await client.classify("hi")


async def test_missing_candidates_raise():
    client = make_client(lambda request: httpx.Response(200, json={"candidates": []}))

    with pytest.raises(ExternalServiceError):
        await client.generate("hi", ShoppingIntent(intent="general"), [])


async def test_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExternalServiceError):
        await make_client(handler).classify("hi")


async def test_without_api_key_nothing_is_sent():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=gemini_answer("{}"))

    client = make_client(handler, api_key=None)

    assert client.enabled is False
    with pytest.raises(ExternalServiceError):
        await client.generate("hi", ShoppingIntent(intent="general"), [])
    assert calls == []


async def test_generate_sends_products_without_ids():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=gemini_answer("Great pick!"))

    reply = await make_client(handler).generate(
        "headphones?", ShoppingIntent(intent="search"), [headphones()]
    )

    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert reply == "Great pick!"
    assert "Wireless Bluetooth Headphones: $129.99" in prompt
    assert "In stock: 25 units" in prompt
    assert "prod-123" not in prompt


async def test_generate_with_empty_text_uses_default_reply():
    client = make_client(lambda request: httpx.Response(200, json=gemini_answer("")))

    reply = await client.generate("hi", ShoppingIntent(intent="general"), [])

    assert reply == EMPTY_REPLY


def test_reply_context_marks_unpurchasable_products():
    product = headphones()
    product.inventory = 0

    context = build_reply_context("hi", ShoppingIntent(intent="get_info"), [product])

    assert 'User message: "hi"' in context
    assert "Intent: get_info" in context
    assert "In stock: out of stock" in context
