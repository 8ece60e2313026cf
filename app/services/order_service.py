# app/services/order_service.py
import logging

from fastapi import HTTPException, status

from app.models.order import Order
from app.repositories.storage import Storage
from app.schemas.order import OrderCreate

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create order from the checkout payload
      - Clear the session cart after success
      - Status updates (free text, no transition rules)
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def list_orders(self) -> list[Order]:
        return self.storage.get_orders()

    def get_order(self, order_id: str) -> Order:
        order = self.storage.get_order(order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return order

    def place_order(self, payload: OrderCreate, session_id: str | None = None) -> Order:
        """
        Store the order, then empty the cart it came from.

        Without a session id there is no cart to clear.
        """
        order = self.storage.create_order(payload)
        logger.info("Order %s placed (total %s)", order.id, order.total)

        if session_id:
            self.storage.clear_cart(session_id)

        return order

    def update_status(self, order_id: str, new_status: str) -> Order:
        order = self.storage.update_order_status(order_id, new_status)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return order
