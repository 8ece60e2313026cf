# app/services/catalog_service.py
import random
from decimal import Decimal

from app.models.product import Product
from app.repositories.storage import Storage
from app.schemas.chat import PriceRange

SEARCH_LIMIT = 6
RECOMMENDATION_LIMIT = 4


def filter_by_price(products: list[Product], price_range: PriceRange | None) -> list[Product]:
    """
    Keep products whose price lies inside the range, bounds inclusive.
    A missing bound is open.
    """
    if price_range is None:
        return products

    low = Decimal(str(price_range.min)) if price_range.min is not None else None
    high = Decimal(str(price_range.max)) if price_range.max is not None else None

    kept: list[Product] = []
    for product in products:
        price = Decimal(product.price)
        if low is not None and price < low:
            continue
        if high is not None and price > high:
            continue
        kept.append(product)
    return kept


class CatalogService:
    """
    Product lookups used by the shopping assistant.

    No state of its own; every call reads the store.
    """

    def __init__(self, storage: Storage, rng: random.Random | None = None):
        self.storage = storage
        self.rng = rng or random.Random()

    def get_product(self, product_id: str) -> Product | None:
        return self.storage.get_product(product_id)

    def search_products(
        self,
        query: str,
        price_range: PriceRange | None = None,
    ) -> list[Product]:
        """
        Store search, then price filter, then the first SEARCH_LIMIT hits
        in store order.
        """
        products = filter_by_price(self.storage.search_products(query), price_range)
        return products[:SEARCH_LIMIT]

    def get_recommendations(
        self,
        category: str | None = None,
        price_range: PriceRange | None = None,
    ) -> list[Product]:
        """
        A random pick of up to RECOMMENDATION_LIMIT products, from one
        category or the whole catalog.
        """
        if category:
            products = self.storage.get_products_by_category(category)
        else:
            products = self.storage.get_products()

        products = filter_by_price(products, price_range)
        self.rng.shuffle(products)
        return products[:RECOMMENDATION_LIMIT]
