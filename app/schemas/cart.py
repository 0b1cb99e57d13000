# app/schemas/cart.py
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import SQLModel


class CartItemAdd(SQLModel):
    """
    Payload for adding to cart. Quantity defaults to 1.
    """

    model_config = ConfigDict(extra="ignore")

    product_id: int | None = None
    # Left unparsed so CartService decides what counts as a positive integer.
    quantity: Any = 1


class CartItemUpdate(SQLModel):
    """
    Payload for setting the quantity of a product in the cart.
    """

    model_config = ConfigDict(extra="ignore")

    product_id: int | None = None
    quantity: Any = None


class CartItemRemove(SQLModel):
    model_config = ConfigDict(extra="ignore")

    product_id: int | None = None


class CartItemRead(SQLModel):
    """
    A single cart row as stored.
    """

    id: int
    user_id: int
    product_id: int
    quantity: int


class CartLine(SQLModel):
    """
    Cart row joined with the product's name, price and image.
    """

    id: int
    product_id: int
    name: str
    price: float
    image: str | None = None
    quantity: int


class CartSummary(BaseModel):
    """
    Full cart response model with totals.

    item_count is the number of distinct rows, not the sum of quantities.
    """

    model_config = ConfigDict(populate_by_name=True)

    items: list[CartLine]
    total: float
    item_count: int = Field(alias="itemCount")


class CartCleared(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items_removed: int = Field(alias="itemsRemoved")
