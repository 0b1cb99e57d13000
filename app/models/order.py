# app/models/order.py
from datetime import datetime, timezone

from sqlalchemy import Column, Numeric, Text
from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order.

    `order_details` is a JSON snapshot (see app.schemas.order.OrderDetails)
    of the cart lines, shipping address and payment taken at checkout time.
    It is never updated afterwards.
    """

    __tablename__ = "orders"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    user_id: int = Field(
        foreign_key="users.id",
        index=True,
    )

    total_amount: float = Field(
        sa_column=Column(Numeric(10, 2, asdecimal=False), nullable=False),
        description="Sum of line subtotals",
    )

    # pending | completed
    status: str = Field(
        default="pending",
        index=True,
        description="Order status",
    )

    order_details: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Serialized OrderDetails snapshot",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
