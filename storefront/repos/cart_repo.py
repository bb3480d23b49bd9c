# storefront/repos/cart_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel


def _dialect_insert(db: Session):
    """INSERT construct with ON CONFLICT support for the bound database."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"Upsert not supported for dialect {dialect}")
    return insert


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: str) -> CartModel | None:
        stmt = (
            select(CartModel)
            .where(CartModel.user_id == user_id)
            .options(selectinload(CartModel.items))
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).first()

    def ensure_cart(self, user_id: str) -> CartModel:
        # concurrent callers race on the unique user_id, the loser inserts nothing
        insert = _dialect_insert(self.db)
        self.db.execute(
            insert(CartModel)
            .values(user_id=user_id)
            .on_conflict_do_nothing(index_elements=["user_id"])
        )
        return self.db.scalars(select(CartModel).where(CartModel.user_id == user_id)).one()

    def upsert_cart_item(self, cart_id: int, product_id: int, quantity: int) -> None:
        insert = _dialect_insert(self.db)
        stmt = insert(CartItemModel).values(cart_id=cart_id, product_id=product_id, quantity=quantity)
        stmt = stmt.on_conflict_do_update(
            index_elements=["cart_id", "product_id"],
            set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
        )
        self.db.execute(stmt)

    def get_cart_item(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)

    def commit(self):
        self.db.commit()
        # upserts bypass the identity map, drop anything already loaded
        self.db.expire_all()

    def rollback(self):
        self.db.rollback()
