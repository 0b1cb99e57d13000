# app/services/product_service.py
import re

from sqlmodel import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.product import Product
from app.repositories.product_repo import ProductRepository


def parse_id(raw: str | int, label: str) -> int:
    """
    Turn a path segment into a positive integer id.

    Raises:
        ValidationError(400): "Valid <label> ID is required"
    """
    value = str(raw).strip()
    if not re.fullmatch(r"\d+", value, re.ASCII):
        raise ValidationError(f"Valid {label} ID is required")
    return int(value)


# Largest id an INTEGER primary key can hold (signed 64-bit).
MAX_ID = 2**63 - 1


def is_storable_id(value: int) -> bool:
    """False for ids no row can have; looking them up would overflow the driver."""
    return 0 < value <= MAX_ID


class ProductService:
    """
    Read-only catalog operations.

    Category filtering and search work in memory over the full catalog,
    which is small (seeded jewellery collection).
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(self, session: Session) -> list[Product]:
        """All products, newest first."""
        return self.repo.list(session)

    def get_product(self, session: Session, product_id: str | int) -> Product:
        """
        Get a single product by id.

        Raises:
            ValidationError(400): id is not numeric.
            NotFoundError(404): no such product.
        """
        pid = parse_id(product_id, "product")
        product = self.repo.get_by_id(session, pid) if is_storable_id(pid) else None
        if not product:
            raise NotFoundError("Product not found")
        return product

    def list_by_category(self, session: Session, category: str) -> list[Product]:
        """Case-insensitive exact match on the category label."""
        wanted = category.lower()
        return [
            p
            for p in self.repo.list(session)
            if p.category and p.category.lower() == wanted
        ]

    def search(self, session: Session, query: str) -> list[Product]:
        """
        Case-insensitive substring match on name, description or category.

        Raises:
            ValidationError(400): empty or whitespace-only query.
        """
        if not query or not query.strip():
            raise ValidationError("Search query is required")

        needle = query.lower()
        return [
            p
            for p in self.repo.list(session)
            if needle in p.name.lower()
            or (p.description and needle in p.description.lower())
            or (p.category and needle in p.category.lower())
        ]
