# app/core/gemini_client.py
"""
Gemini client for the shopping assistant.

Responsibilities:
  - Classify a chat message into a ShoppingIntent (JSON mode).
  - Write the assistant's reply from the message, intent and products.
  - Turn every failure into ExternalServiceError so callers can fall back.

Talks to the REST `generateContent` endpoint with a shared httpx.AsyncClient:

    POST {GEMINI_BASE_URL}/models/{GEMINI_MODEL}:generateContent
    x-goog-api-key: <GEMINI_API_KEY>
"""

import logging
from typing import Any, Protocol

import httpx
from fastapi import Request
from pydantic import ValidationError

from app.core.config import Settings
from app.core.exceptions import ExternalServiceError
from app.models.product import Product
from app.schemas.chat import ShoppingIntent

logger = logging.getLogger(__name__)

INTENT_PROMPT = """You are a shopping assistant that analyzes user messages to understand their shopping intent.
Classify the user's message into one of these intents:
- "search": User wants to find specific products
- "recommend": User wants product recommendations
- "add_to_cart": User wants to add a product to cart
- "get_info": User wants information about a specific product
- "general": General conversation or unclear intent

Extract relevant parameters:
- query: search terms or product names
- category: product category if mentioned
- priceRange: if user mentions budget (min/max in dollars)
- productId: if referring to a specific product

Respond with JSON in this exact format:
{"intent": "search", "query": "wireless headphones", "category": "electronics", "priceRange": {"min": 0, "max": 150}}"""

INTENT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "intent": {
            "type": "STRING",
            "enum": ["search", "recommend", "add_to_cart", "get_info", "general"],
        },
        "query": {"type": "STRING"},
        "category": {"type": "STRING"},
        "priceRange": {
            "type": "OBJECT",
            "properties": {
                "min": {"type": "NUMBER"},
                "max": {"type": "NUMBER"},
            },
        },
        "productId": {"type": "STRING"},
    },
    "required": ["intent"],
}

ASSISTANT_PROMPT = """You are Glide's AI shopping assistant. You help customers find products and make purchasing decisions.

Key guidelines:
- Be helpful, friendly, and concise
- Focus on product benefits and features
- Always mention specific prices when discussing products
- Use natural, conversational language
- If showing multiple products, format them in a clean, readable way
- For product details, include: name, price, key features
- Keep responses under 200 words
- Never hallucinate product information - only use provided data"""

EMPTY_REPLY = "I'm sorry, I couldn't process your request right now. Please try again."


class ShoppingAI(Protocol):
    """
    What the chat pipeline needs from a language model.
    Both methods raise ExternalServiceError on failure.
    """

    async def classify(self, message: str) -> ShoppingIntent: ...

    async def generate(
        self,
        message: str,
        intent: ShoppingIntent,
        products: list[Product],
    ) -> str: ...


def build_reply_context(
    message: str,
    intent: ShoppingIntent,
    products: list[Product],
) -> str:
    """
    Prompt body for the reply: the message, the intent and the matched
    products (no ids, the model never needs them).
    """
    context = f'User message: "{message}"\nIntent: {intent.intent}\n'

    if products:
        context += "\nAvailable products:\n"
        for p in products:
            stock = f"{p.inventory} units" if p.is_purchasable() else "out of stock"
            context += (
                f"- {p.name}: ${p.price}\n"
                f"  {p.description}\n"
                f"  Category: {p.category}\n"
                f"  In stock: {stock}\n\n"
            )

    return context


class GeminiClient:
    def __init__(self, settings: Settings, http: httpx.AsyncClient):
        self.api_key = settings.GEMINI_API_KEY
        self.url = f"{settings.GEMINI_BASE_URL}/models/{settings.GEMINI_MODEL}:generateContent"
        self.http = http
        self.enabled = bool(self.api_key)

    async def _generate_content(self, body: dict[str, Any]) -> str:
        """
        Send one generateContent request and return the first candidate's text.

        Raises:
            ExternalServiceError: not configured, transport failure,
                non-2xx status or a response without text.
        """
        if not self.enabled:
            raise ExternalServiceError("Gemini API key is not configured")

        try:
            response = await self.http.post(
                self.url,
                headers={"x-goog-api-key": self.api_key},
                json=body,
            )
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Gemini request failed: {e}") from e

        if response.status_code != 200:
            raise ExternalServiceError(f"Gemini API error: {response.status_code}")

        try:
            candidates = response.json().get("candidates") or []
            parts = candidates[0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)
        except (ValueError, AttributeError, LookupError, TypeError) as e:
            raise ExternalServiceError("Gemini returned no usable candidate") from e

    async def classify(self, message: str) -> ShoppingIntent:
        text = await self._generate_content(
            {
                "systemInstruction": {"parts": [{"text": INTENT_PROMPT}]},
                "contents": [{"role": "user", "parts": [{"text": message}]}],
                "generationConfig": {
                    "responseMimeType": "application/json",
                    "responseSchema": INTENT_SCHEMA,
                },
            }
        )
        if not text.strip():
            raise ExternalServiceError("Gemini returned an empty intent")

        try:
            return ShoppingIntent.model_validate_json(text)
        except ValidationError as e:
            raise ExternalServiceError(f"Unparseable intent: {text!r}") from e

    async def generate(
        self,
        message: str,
        intent: ShoppingIntent,
        products: list[Product],
    ) -> str:
        text = await self._generate_content(
            {
                "systemInstruction": {"parts": [{"text": ASSISTANT_PROMPT}]},
                "contents": [
                    {
                        "role": "user",
                        "parts": [{"text": build_reply_context(message, intent, products)}],
                    }
                ],
            }
        )
        return text or EMPTY_REPLY


def get_shopping_ai(request: Request) -> ShoppingAI:
    """
    FastAPI dependency returning the client built at startup.
    """
    return request.app.state.shopping_ai
