# app/routers/products.py
from fastapi import APIRouter, Depends, status

from app.database import get_storage
from app.repositories.storage import Storage
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.services.product_service import ProductService

router = APIRouter(tags=["Products"])


def get_product_service(storage: Storage = Depends(get_storage)) -> ProductService:
    return ProductService(storage)


# -------- Storefront endpoints --------


@router.get("/products", response_model=list[ProductRead])
def list_products(
    search: str | None = None,
    category: str | None = None,
    service: ProductService = Depends(get_product_service),
):
    """
    List products.

    - `search` matches name, description or category (case-insensitive).
    - `category` is an exact, case-insensitive match.
    - If both are given, `search` wins.
    """
    return service.list_products(search=search, category=category)


@router.get("/products/{product_id}", response_model=ProductRead)
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    """
    Get a single product by id.
    """
    return service.get_product(product_id)


@router.get("/categories", response_model=list[str])
def list_categories(service: ProductService = Depends(get_product_service)):
    """
    Distinct product categories, derived from the catalog on each call.
    """
    return service.list_categories()


# -------- Admin endpoints --------


@router.post(
    "/products",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
):
    """
    Create a new product.
    """
    return service.create_product(payload)


@router.put("/products/{product_id}", response_model=ProductRead)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    """
    Update an existing product. Only the fields sent are replaced.
    """
    return service.update_product(product_id, payload)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    service.delete_product(product_id)
    return None
