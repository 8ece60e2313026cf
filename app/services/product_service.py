# app/services/product_service.py
from fastapi import HTTPException, status

from app.models.product import Product
from app.repositories.storage import Storage
from app.schemas.product import ProductCreate, ProductUpdate


class ProductService:
    """
    Business logic for the product catalog and the admin panel.

    Responsibilities:
      - storefront listing (search takes precedence over category)
      - map missing ids to 404
      - category list derived from the catalog on every call
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def list_products(
        self,
        search: str | None = None,
        category: str | None = None,
    ) -> list[Product]:
        if search:
            return self.storage.search_products(search)
        if category:
            return self.storage.get_products_by_category(category)
        return self.storage.get_products()

    def get_product(self, product_id: str) -> Product:
        product = self.storage.get_product(product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def create_product(self, payload: ProductCreate) -> Product:
        return self.storage.create_product(payload)

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product:
        """
        Partial update: only the fields present in the payload are replaced.
        """
        product = self.storage.update_product(
            product_id,
            payload.model_dump(exclude_unset=True),
        )
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def delete_product(self, product_id: str) -> None:
        """
        Delete a product. Cart lines pointing at it are left in place and
        disappear from cart reads.
        """
        if not self.storage.delete_product(product_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

    def list_categories(self) -> list[str]:
        """Distinct categories, in first-seen catalog order."""
        return list(dict.fromkeys(p.category for p in self.storage.get_products()))
