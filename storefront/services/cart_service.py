# storefront/services/cart_service.py
from sqlalchemy.orm import Session

from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.schemas import CartItemOut, CartOut, EmptyCart, EmptyCartOut
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    One cart per user, created on first add.
    commands (add, remove) change state, query (get) only reads.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query
    def get_cart(self, user_id: str) -> CartOut | EmptyCartOut:
        cart = self.repo.get_cart_by_user(user_id)

        if not cart:
            return EmptyCartOut(message="Cart not found", cart=EmptyCart(items=[]))

        items = [CartItemOut.model_validate(i) for i in cart.items]
        return CartOut(
            id=cart.id,
            user_id=cart.user_id,
            created_at=cart.created_at,
            items=items,
            total=sum(i.product.price * i.quantity for i in items if i.product),
            item_count=sum(i.quantity for i in items),
        )

    #commands
    def add_item(self, user_id: str, product_id: int, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError.for_field("quantity", "Quantity must be a positive integer")

        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        try:
            cart = self.repo.ensure_cart(user_id)
            # insert or increment in one statement, no read-modify-write window
            self.repo.upsert_cart_item(cart.id, product_id, quantity)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Error adding product {product_id} to cart of user {user_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Added {quantity} x product {product_id} to cart {cart.id} (user {user_id})")

    def remove_item(self, user_id: str, item_id: int) -> None:
        item = self.repo.get_cart_item(item_id)

        # someone else's item looks exactly like a missing one
        if not item or item.cart.user_id != user_id:
            raise NotFoundError("Item not found")

        cart_id = item.cart_id
        self.repo.delete_cart_item(item)
        self.repo.commit()

        logger.info(f"Removed item {item_id} from cart {cart_id} (user {user_id})")
