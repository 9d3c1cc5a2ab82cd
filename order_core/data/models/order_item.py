from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Numeric
from sqlalchemy.orm import relationship
import uuid

from order_core.data.database import Base
from order_core.utils.clock import utcnow


class OrderItemModel(Base):
    """Price/name snapshot of one product at the moment the order was placed."""

    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # survives product deletion, the snapshot below is the record
    product_id = Column(String(36), ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    position = Column(Integer, nullable=False, default=0)

    product_name = Column(String(255), nullable=False)
    product_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)

    order = relationship("OrderModel", back_populates="items")
