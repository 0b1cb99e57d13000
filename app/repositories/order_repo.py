# app/repositories/order_repo.py
from sqlmodel import Session, select

from app.models.order import Order


class OrderRepository:
    """
    Data access layer for orders.

    NOTE:
      - No commits here; checkout is a multi-step transaction
        (insert order + clear cart). The service calls session.commit().
    """

    def list_for_user(self, session: Session, user_id: int) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return list(session.exec(stmt).all())

    def get_for_user(
        self, session: Session, user_id: int, order_id: int
    ) -> Order | None:
        stmt = select(Order).where(Order.id == order_id, Order.user_id == user_id)
        return session.exec(stmt).first()

    def create_order(self, session: Session, order: Order) -> Order:
        """
        Insert an Order without committing, but ensure id is populated.
        """
        session.add(order)
        session.flush()
        session.refresh(order)
        return order
