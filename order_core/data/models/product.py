from sqlalchemy import Column, String, Integer, Numeric, DateTime, Enum as SAEnum
import uuid

from order_core.data.database import Base
from order_core.domain.enums import ProductStatus
from order_core.utils.clock import utcnow


class ProductModel(Base):
    """Catalog product; the order core only reads it and moves its stock."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)

    price = Column(Numeric(10, 2), nullable=False)
    discount_price = Column(Numeric(10, 2), nullable=True)
    stock_quantity = Column(Integer, nullable=False, default=0)

    status = Column(SAEnum(ProductStatus, native_enum=False, length=20), nullable=False, default=ProductStatus.ACTIVE)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    @property
    def effective_price(self):
        return self.discount_price if self.discount_price is not None else self.price
