# app/services/cart_service.py
from sqlmodel import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.cart import CartItem
from app.models.product import Product
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartItemRead, CartLine, CartSummary
from app.services.product_service import is_storable_id


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate quantities (positive integers)
      - validate product existence
      - enforce quantity <= product.stock (total stock, not what's left
        after the current cart)
      - compute cart totals
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # ---- internal helpers ----

    @staticmethod
    def _check_quantity(quantity) -> int:
        # JSON has one number type: 3.0 counts as the integer 3, 1.5 does not.
        if isinstance(quantity, float) and quantity.is_integer():
            quantity = int(quantity)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Quantity must be a positive integer")
        return quantity

    def _get_stocked_product(
        self, session: Session, product_id: int, quantity: int
    ) -> Product:
        product = None
        if is_storable_id(product_id):
            product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise NotFoundError("Product not found")
        if product.stock < quantity:
            raise ValidationError(f"Only {product.stock} items available in stock")
        return product

    @staticmethod
    def _to_read(item: CartItem) -> CartItemRead:
        return CartItemRead(
            id=item.id,
            user_id=item.user_id,
            product_id=item.product_id,
            quantity=item.quantity,
        )

    # ---- public operations ----

    def list_lines(self, session: Session, user_id: int) -> list[CartLine]:
        """Cart rows joined with product name / price / image."""
        return [
            CartLine(
                id=item.id,
                product_id=product.id,
                name=product.name,
                price=product.price,
                image=product.image,
                quantity=item.quantity,
            )
            for item, product in self.cart_repo.list_with_products(session, user_id)
        ]

    @staticmethod
    def compute_total(lines: list[CartLine]) -> float:
        """Sum of price x quantity, rounded to cents."""
        return round(sum(line.price * line.quantity for line in lines), 2)

    def get_cart_summary(self, session: Session, user_id: int) -> CartSummary:
        """
        Return full cart summary:
          - joined lines
          - total (2 decimals)
          - item_count = number of distinct rows
        """
        lines = self.list_lines(session, user_id)
        return CartSummary(
            items=lines,
            total=self.compute_total(lines),
            item_count=len(lines),
        )

    def add_to_cart(
        self,
        session: Session,
        user_id: int,
        product_id: int | None,
        quantity=1,
    ) -> CartItemRead:
        """
        Add a product to the user's cart.

        Rules:
          - product_id is required, quantity must be a positive integer
          - product must exist
          - quantity <= product.stock
          - an existing row for the same product is incremented, never
            duplicated
        """
        if not product_id:
            raise ValidationError("Product ID is required")
        quantity = self._check_quantity(quantity)
        self._get_stocked_product(session, product_id, quantity)

        item = self.cart_repo.add_quantity(session, user_id, product_id, quantity)
        return self._to_read(item)

    def update_quantity(
        self,
        session: Session,
        user_id: int,
        product_id: int | None,
        quantity,
    ) -> CartItemRead:
        """
        Set the quantity of a product in the cart to exactly `quantity`.

        The old row (if any) is removed and a fresh one added in the same
        transaction, so the result never merges with the previous amount.
        """
        if not product_id or not quantity:
            raise ValidationError("Product ID and quantity are required")
        quantity = self._check_quantity(quantity)
        self._get_stocked_product(session, product_id, quantity)

        self.cart_repo.delete_item(session, user_id, product_id, commit=False)
        item = self.cart_repo.add_quantity(session, user_id, product_id, quantity)
        return self._to_read(item)

    def remove_item(
        self,
        session: Session,
        user_id: int,
        product_id: int | None,
    ) -> None:
        """
        Remove a product from the cart.

        Raises:
            NotFoundError(404): nothing was deleted.
        """
        if not product_id:
            raise ValidationError("Product ID is required")

        removed = 0
        if is_storable_id(product_id):
            removed = self.cart_repo.delete_item(session, user_id, product_id)
        if removed == 0:
            raise NotFoundError("Item not found in cart")

    def clear_cart(self, session: Session, user_id: int) -> int:
        """
        Clear all items from the cart; returns how many rows were removed.
        """
        return self.cart_repo.clear_user_cart(session, user_id)
