# app/services/order_service.py
import logging
from datetime import date, datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.errors import (
    ExternalServiceError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from app.core.payment_client import PaymentProcessor
from app.models.order import Order
from app.repositories.cart_repo import CartRepository
from app.repositories.order_repo import OrderRepository
from app.schemas.order import (
    CheckoutReceipt,
    CheckoutRequest,
    OrderDetails,
    OrderLineItem,
    OrderRead,
)
from app.services.cart_service import CartService
from app.services.product_service import is_storable_id, parse_id

logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_DAYS = 7


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Turn the cart into an order (checkout)
      - Charge through the payment processor
      - Store an immutable JSON snapshot of what was bought
      - Clear the cart after success
      - Read a user's own order history
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        cart_service: CartService,
    ):
        self.order_repo = order_repo
        self.cart_repo = cart_repo
        self.cart_service = cart_service

    # -------- Checkout --------

    def checkout(
        self,
        session: Session,
        user_id: int,
        payload: CheckoutRequest,
        payment_processor: PaymentProcessor,
        delivery_days: int = DEFAULT_DELIVERY_DAYS,
    ) -> CheckoutReceipt:
        """
        Convert the current user's cart into a completed Order.

        Steps:
          1. Validate shipping address (street + city).
          2. Load cart lines; error if empty.
          3. Compute total from the cart.
          4. Charge via the payment processor; on decline stop here,
             leaving the cart untouched and no order row.
          5. Build the order snapshot.
          6. Insert Order (status='completed') and clear the cart in one
             transaction.
          7. Return the receipt.

        Stock is not decremented.
        """
        # 1) Address
        address = payload.shipping_address
        if (
            address is None
            or not (address.street or "").strip()
            or not (address.city or "").strip()
        ):
            raise ValidationError("Complete shipping address is required")

        # 2) Cart snapshot
        lines = self.cart_service.list_lines(session, user_id)
        if not lines:
            raise ValidationError("Cart is empty")

        # 3) Total
        total_amount = self.cart_service.compute_total(lines)

        # 4) Payment
        method = payload.payment_method
        result = payment_processor.process_payment(total_amount, method)
        if not result.success:
            logger.warning(
                "Payment failed for user %s (%.2f via %s): %s",
                user_id,
                total_amount,
                method,
                result.error,
            )
            raise ExternalServiceError("Payment processing failed", error=result.error)

        # 5) Snapshot
        details = OrderDetails(
            items=[
                OrderLineItem(
                    product_id=line.product_id,
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    subtotal=round(line.price * line.quantity, 2),
                )
                for line in lines
            ],
            shipping_address=address,
            payment_method=method,
            payment_id=result.payment_id,
            order_date=datetime.now(timezone.utc),
        )

        # 6) Persist order + clear cart, committed together
        try:
            order = self.order_repo.create_order(
                session,
                Order(
                    user_id=user_id,
                    total_amount=total_amount,
                    status="completed",
                    order_details=details.model_dump_json(),
                ),
            )
            self.cart_repo.clear_user_cart(session, user_id, commit=False)
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.exception(
                "Payment %s captured but order for user %s was not saved",
                result.payment_id,
                user_id,
            )
            raise UnexpectedError("Failed to process checkout")

        logger.info(
            "Order %s placed by user %s (%.2f, payment %s)",
            order.id,
            user_id,
            total_amount,
            result.payment_id,
        )

        # 7) Receipt
        return CheckoutReceipt(
            order_id=order.id,
            total_amount=total_amount,
            status=order.status,
            payment_id=result.payment_id,
            estimated_delivery=date.today() + timedelta(days=delivery_days),
        )

    # -------- History --------

    @staticmethod
    def _to_read(order: Order) -> OrderRead:
        return OrderRead(
            id=order.id,
            user_id=order.user_id,
            total_amount=order.total_amount,
            status=order.status,
            order_details=OrderDetails.model_validate_json(order.order_details),
            created_at=order.created_at,
        )

    def list_user_orders(self, session: Session, user_id: int) -> list[OrderRead]:
        """
        List the user's orders, newest first, snapshots deserialized.
        """
        return [self._to_read(o) for o in self.order_repo.list_for_user(session, user_id)]

    def get_user_order(
        self,
        session: Session,
        user_id: int,
        order_id: str | int,
    ) -> OrderRead:
        """
        Get a single order for the user.

        - 400 if the id is not numeric.
        - 404 if order not found or does not belong to this user.
        """
        oid = parse_id(order_id, "order")
        order = None
        if is_storable_id(oid):
            order = self.order_repo.get_for_user(session, user_id, oid)
        if not order:
            raise NotFoundError("Order not found")
        return self._to_read(order)
