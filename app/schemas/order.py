# app/schemas/order.py
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from sqlmodel import SQLModel

OrderStatus = Literal["pending", "completed"]


class ShippingAddress(BaseModel):
    """
    Delivery address. Only street and city are mandatory for checkout;
    any extra keys (state, zip, country, ...) are kept in the snapshot.
    """

    model_config = ConfigDict(extra="allow")

    street: str | None = None
    city: str | None = None


class CheckoutRequest(SQLModel):
    """
    Payload for checking out the current cart.

    Backend derives:
      - user_id from token
      - total_amount and line items from the cart
      - status = 'completed' once payment succeeds
    """

    model_config = ConfigDict(extra="ignore")

    shipping_address: ShippingAddress | None = None
    payment_method: str = "mock"


class OrderLineItem(BaseModel):
    """
    One line of the order snapshot. This shape is stable: stored orders are
    read back through it.
    """

    product_id: int
    name: str
    price: float
    quantity: int
    subtotal: float


class OrderDetails(BaseModel):
    """
    Point-in-time copy of the cart, address and payment taken at checkout.
    Stored as JSON text in orders.order_details.
    """

    items: list[OrderLineItem]
    shipping_address: ShippingAddress
    payment_method: str
    payment_id: str | None = None
    order_date: datetime


class OrderRead(SQLModel):
    """
    Order with its snapshot deserialized.
    """

    id: int
    user_id: int
    total_amount: float
    status: OrderStatus
    order_details: OrderDetails
    created_at: datetime


class CheckoutReceipt(SQLModel):
    """
    `data` of a successful checkout.
    """

    order_id: int
    total_amount: float
    status: OrderStatus
    payment_id: str | None = None
    estimated_delivery: date
