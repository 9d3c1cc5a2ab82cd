# order_core/repos/cart_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from order_core.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_cart_items(self, user_id: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.created_at)
            ).scalars()
        )

    def get_cart_item(self, item_id: str) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def delete_cart_item(self, item: CartItemModel) -> None:
        # no commit, the caller owns the transaction
        self.db.delete(item)
