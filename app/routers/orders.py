# app/routers/orders.py
from fastapi import APIRouter, Depends, Header, status

from app.database import get_storage
from app.repositories.storage import Storage
from app.schemas.order import OrderCreate, OrderRead, OrderStatusUpdate
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


def get_order_service(storage: Storage = Depends(get_storage)) -> OrderService:
    return OrderService(storage)


@router.get("", response_model=list[OrderRead])
def list_orders(service: OrderService = Depends(get_order_service)):
    """
    List all orders.
    """
    return service.list_orders()


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    return service.get_order(order_id)


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    payload: OrderCreate,
    x_session_id: str | None = Header(default=None),
    service: OrderService = Depends(get_order_service),
):
    """
    Place an order at checkout.

    The cart of the `x-session-id` session is cleared on success.
    """
    return service.place_order(payload, x_session_id)


@router.put("/{order_id}/status", response_model=OrderRead)
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    """
    Update order status (admin panel).
    """
    return service.update_status(order_id, payload.status)
