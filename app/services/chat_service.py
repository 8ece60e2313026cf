# app/services/chat_service.py
import logging

from app.core.exceptions import ExternalServiceError
from app.core.gemini_client import ShoppingAI
from app.models.product import Product
from app.schemas.chat import ChatResponse, ShoppingIntent
from app.schemas.product import ProductRead
from app.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I'm experiencing some technical difficulties. Please try again in a moment."


class ShoppingAssistant:
    """
    Turns one chat message into a reply plus optional product suggestions.

    Steps:
      1. classify  - AI call, falls back to the "general" intent
      2. resolve   - catalog lookups chosen by the intent
      3. generate  - AI call, falls back to FALLBACK_REPLY

    Stateless: nothing about earlier messages is kept.
    """

    def __init__(self, catalog: CatalogService, ai: ShoppingAI):
        self.catalog = catalog
        self.ai = ai

    async def classify(self, message: str) -> ShoppingIntent:
        try:
            return await self.ai.classify(message)
        except ExternalServiceError as e:
            logger.warning(f"Intent classification failed, using 'general': {e}")
            return ShoppingIntent(intent="general")

    def resolve(self, intent: ShoppingIntent) -> list[Product]:
        if intent.intent == "search":
            if intent.query:
                return self.catalog.search_products(intent.query, intent.price_range)
            return []

        if intent.intent == "recommend":
            return self.catalog.get_recommendations(intent.category, intent.price_range)

        if intent.intent == "get_info":
            if intent.product_id:
                product = self.catalog.get_product(intent.product_id)
                return [product] if product else []
            if intent.query:
                # Best match = first search hit
                return self.catalog.search_products(intent.query)[:1]
            return []

        # add_to_cart, general
        return []

    async def generate(
        self,
        message: str,
        intent: ShoppingIntent,
        products: list[Product],
    ) -> str:
        try:
            return await self.ai.generate(message, intent, products)
        except ExternalServiceError as e:
            logger.warning(f"Reply generation failed, using fallback text: {e}")
            return FALLBACK_REPLY

    async def process_query(self, message: str) -> ChatResponse:
        intent = await self.classify(message)
        products = self.resolve(intent)
        response = await self.generate(message, intent, products)

        return ChatResponse(
            response=response,
            products=[ProductRead.model_validate(p) for p in products] or None,
            intent=intent,
        )
