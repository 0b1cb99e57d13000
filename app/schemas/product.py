# app/schemas/product.py
from datetime import datetime

from sqlmodel import SQLModel


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: int
    name: str
    description: str | None = None
    price: float
    image: str | None = None
    category: str | None = None
    stock: int
    created_at: datetime
