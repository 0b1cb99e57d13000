# app/repositories/product_repo.py
from sqlmodel import Session, select

from app.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (queries only; the catalog is seeded, not edited).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        return session.get(Product, product_id)

    def list(self, session: Session) -> list[Product]:
        """Full catalog, newest first."""
        stmt = select(Product).order_by(Product.created_at.desc(), Product.id.desc())
        return list(session.exec(stmt).all())
