from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Numeric, Text, Enum as SAEnum
from sqlalchemy.orm import relationship
import uuid

from order_core.data.database import Base
from order_core.domain.enums import OrderStatus, PaymentStatus
from order_core.utils.clock import utcnow


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    order_number = Column(String(50), nullable=False, unique=True)

    total_amount = Column(Numeric(10, 2), nullable=False)

    shipping_address = Column(Text, nullable=False)
    shipping_phone = Column(String(20), nullable=True)
    shipping_name = Column(String(100), nullable=True)

    status = Column(SAEnum(OrderStatus, native_enum=False, length=20), nullable=False, default=OrderStatus.PENDING)
    payment_method = Column(String(50), nullable=True)
    payment_status = Column(
        SAEnum(PaymentStatus, native_enum=False, length=20), nullable=False, default=PaymentStatus.PENDING
    )

    notes = Column(Text, nullable=True)
    admin_notes = Column(Text, nullable=True)

    # bumped on every write, guards status transitions against stale reads
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    customer = relationship("UserModel")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
