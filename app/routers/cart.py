# app/routers/cart.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_user
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import (
    CartCleared,
    CartItemAdd,
    CartItemRead,
    CartItemRemove,
    CartItemUpdate,
    CartSummary,
)
from app.schemas.common import ApiResponse
from app.schemas.user import CurrentUser
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.post(
    "/add",
    response_model=ApiResponse[CartItemRead],
    status_code=status.HTTP_201_CREATED,
)
def add_to_cart(
    payload: CartItemAdd,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_user),
):
    """
    Add a product to the current user's cart (merging with an existing row).

    Returns the resulting cart row.
    """
    item = service.add_to_cart(
        session, current_user.id, payload.product_id, payload.quantity
    )
    return ApiResponse(message="Item added to cart successfully", data=item)


@router.get("", response_model=ApiResponse[CartSummary])
def get_my_cart(
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_user),
):
    """
    Get current user's cart: joined items, total and itemCount.
    """
    summary = service.get_cart_summary(session, current_user.id)
    return ApiResponse(message="Cart retrieved successfully", data=summary)


@router.put("/update", response_model=ApiResponse[CartItemRead])
def update_cart_item(
    payload: CartItemUpdate,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_user),
):
    """
    Set the quantity of a product in the cart.

    Returns the resulting cart row.
    """
    item = service.update_quantity(
        session=session,
        user_id=current_user.id,
        product_id=payload.product_id,
        quantity=payload.quantity,
    )
    return ApiResponse(message="Cart item updated successfully", data=item)


@router.delete("/remove", response_model=ApiResponse[None])
def remove_cart_item(
    payload: CartItemRemove,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_user),
):
    """
    Remove a product from the cart.
    """
    service.remove_item(session, current_user.id, payload.product_id)
    return ApiResponse(message="Item removed from cart successfully")


@router.delete("/clear", response_model=ApiResponse[CartCleared])
def clear_cart(
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_user),
):
    """
    Clear the entire cart; returns how many rows were removed.
    """
    removed = service.clear_cart(session, current_user.id)
    return ApiResponse(
        message="Cart cleared successfully",
        data=CartCleared(items_removed=removed),
    )
