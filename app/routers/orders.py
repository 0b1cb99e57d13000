# app/routers/orders.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_user
from app.core.config import Settings, get_app_settings
from app.core.payment_client import PaymentProcessor, get_payment_processor
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.common import ApiResponse
from app.schemas.order import CheckoutReceipt, CheckoutRequest, OrderRead
from app.schemas.user import CurrentUser
from app.services.cart_service import CartService
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
cart_repo = CartRepository()
product_repo = ProductRepository()
service = OrderService(order_repo, cart_repo, CartService(cart_repo, product_repo))


@router.post(
    "/checkout",
    response_model=ApiResponse[CheckoutReceipt],
    status_code=status.HTTP_201_CREATED,
)
def checkout(
    payload: CheckoutRequest,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_user),
    payment_processor: PaymentProcessor = Depends(get_payment_processor),
    settings: Settings = Depends(get_app_settings),
):
    """
    Pay for the current cart and turn it into an order.

    Errors:
      - 400 incomplete address, empty cart, or payment declined.
    """
    receipt = service.checkout(
        session,
        current_user.id,
        payload,
        payment_processor,
        delivery_days=settings.DELIVERY_DAYS,
    )
    return ApiResponse(message="Order placed successfully", data=receipt)


@router.get("", response_model=ApiResponse[list[OrderRead]])
def list_my_orders(
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_user),
):
    """
    List the authenticated user's orders, newest first.
    """
    orders = service.list_user_orders(session, current_user.id)
    return ApiResponse(message="Orders retrieved successfully", data=orders)


@router.get("/{order_id}", response_model=ApiResponse[OrderRead])
def get_my_order(
    order_id: str,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_user),
):
    """
    Get a single order belonging to the current user.
    """
    order = service.get_user_order(session, current_user.id, order_id)
    return ApiResponse(message="Order retrieved successfully", data=order)
