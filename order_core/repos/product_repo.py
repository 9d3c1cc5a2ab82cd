# order_core/repos/product_repo.py
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from order_core.data.models.product import ProductModel
from order_core.domain.enums import ProductStatus


class ProductRepo:
    """
    Inventory ledger over the catalog's products table.

    Stock is only ever moved with conditional UPDATEs so concurrent checkouts
    cannot oversell; nothing here commits.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_stock(self, product_id: str) -> int:
        stock = self.db.execute(
            select(ProductModel.stock_quantity).where(ProductModel.id == product_id)
        ).scalar_one_or_none()
        return stock or 0

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """UPDATE ... SET stock = stock - n WHERE stock >= n; False when nothing matched."""
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.stock_quantity >= quantity,
            )
            .values(stock_quantity=ProductModel.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        self._reload(product_id)
        return True

    def mark_out_of_stock_if_empty(self, product_id: str) -> bool:
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.stock_quantity == 0,
            )
            .values(status=ProductStatus.OUT_OF_STOCK)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        self._reload(product_id)
        return True

    def count_products(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    def count_low_stock(self, threshold: int) -> int:
        return self.db.execute(
            select(func.count(ProductModel.id)).where(ProductModel.stock_quantity <= threshold)
        ).scalar_one()

    def _reload(self, product_id: str) -> None:
        # keep an already loaded instance in step with the row
        product = self.db.get(ProductModel, product_id)
        if product is not None:
            self.db.refresh(product)
