# app/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, Numeric
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Jewellery catalog entry.

    `stock` is read when adding to the cart but never decremented by checkout.
    """

    __tablename__ = "products"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        index=True,
        description="Display name of the piece",
    )

    description: str | None = Field(
        default=None,
        description="Long description",
    )

    # DECIMAL(10,2) in the schema, float in Python
    price: float = Field(
        sa_column=Column(Numeric(10, 2, asdecimal=False), nullable=False),
        description="Unit price",
    )

    image: str | None = Field(
        default=None,
        description="Image URL",
    )

    # Free-text label: rings | necklaces | bracelets | earrings | ...
    category: str | None = Field(
        default=None,
        index=True,
        description="Category label",
    )

    stock: int = Field(
        default=0,
        ge=0,
        description="How many units currently in stock",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
