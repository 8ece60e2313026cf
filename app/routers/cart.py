# app/routers/cart.py
import uuid

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status

from app.database import get_storage
from app.repositories.storage import Storage
from app.schemas.cart import CartItemAdded, CartItemCreate, CartItemRead, CartItemUpdate, CartView
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


def get_cart_service(storage: Storage = Depends(get_storage)) -> CartService:
    return CartService(storage)


@router.get("", response_model=CartView)
def get_cart(
    x_session_id: str | None = Header(default=None),
    service: CartService = Depends(get_cart_service),
):
    """
    Get the cart of the session in `x-session-id`.

    A new session id is generated (and returned) when the header is missing.
    """
    session_id = x_session_id or str(uuid.uuid4())
    return service.get_cart(session_id)


@router.post(
    "",
    response_model=CartItemAdded,
    status_code=status.HTTP_201_CREATED,
)
def add_to_cart(
    payload: CartItemCreate,
    x_session_id: str | None = Header(default=None),
    service: CartService = Depends(get_cart_service),
):
    """
    Add a product to the session's cart.

    Adding the same product again increases the quantity of its line.
    """
    session_id = x_session_id or str(uuid.uuid4())
    return service.add_to_cart(session_id, payload)


@router.put(
    "/{item_id}",
    response_model=CartItemRead,
    responses={204: {"description": "Line removed (quantity <= 0)"}},
)
def update_cart_item(
    item_id: str,
    payload: CartItemUpdate,
    service: CartService = Depends(get_cart_service),
):
    """
    Update the quantity of a cart line.

    A quantity of 0 or less removes the line and answers 204.
    """
    item = service.update_quantity(item_id, payload.quantity)
    if item is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_cart_item(
    item_id: str,
    service: CartService = Depends(get_cart_service),
):
    service.remove_item(item_id)
    return None


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    x_session_id: str | None = Header(default=None),
    service: CartService = Depends(get_cart_service),
):
    """
    Clear the entire cart of the session. Requires `x-session-id`.
    """
    if not x_session_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Session ID required",
        )
    service.clear_cart(x_session_id)
    return None
