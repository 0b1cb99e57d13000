# app/repositories/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, select

from app.models.cart import CartItem
from app.models.product import Product

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepository:
    """
    Data access layer for the cart table.

    Writes go through a single INSERT ... ON CONFLICT (user_id, product_id)
    statement so two concurrent adds for the same pair can never produce two
    rows.
    """

    def _insert(self, session: Session):
        dialect = session.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise RuntimeError(f"Cart upsert not supported on {dialect!r}")

    def get_item(
        self, session: Session, user_id: int, product_id: int
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.user_id == user_id, CartItem.product_id == product_id
        )
        return session.exec(stmt).first()

    def list_with_products(
        self, session: Session, user_id: int
    ) -> list[tuple[CartItem, Product]]:
        """Cart rows joined with their product, in insertion order."""
        stmt = (
            select(CartItem, Product)
            .join(Product, CartItem.product_id == Product.id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.id)
        )
        return list(session.exec(stmt).all())

    def add_quantity(
        self,
        session: Session,
        user_id: int,
        product_id: int,
        quantity: int,
        commit: bool = True,
    ) -> CartItem:
        """
        Insert (user_id, product_id, quantity), or add `quantity` to the
        existing row for that pair.
        """
        insert = self._insert(session)
        stmt = insert(CartItem.__table__).values(
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            created_at=datetime.now(timezone.utc),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "product_id"],
            set_={"quantity": CartItem.__table__.c.quantity + stmt.excluded.quantity},
        )
        session.exec(stmt)
        if commit:
            session.commit()
        else:
            session.flush()

        item = self.get_item(session, user_id, product_id)
        session.refresh(item)
        return item

    def delete_item(
        self,
        session: Session,
        user_id: int,
        product_id: int,
        commit: bool = True,
    ) -> int:
        """Delete the row for this pair; returns the number of rows deleted."""
        stmt = delete(CartItem).where(
            CartItem.user_id == user_id, CartItem.product_id == product_id
        )
        result = session.exec(stmt)
        if commit:
            session.commit()
        return result.rowcount

    def clear_user_cart(
        self, session: Session, user_id: int, commit: bool = True
    ) -> int:
        """Delete every row for the user; returns the number removed."""
        stmt = delete(CartItem).where(CartItem.user_id == user_id)
        result = session.exec(stmt)
        if commit:
            session.commit()
        return result.rowcount
