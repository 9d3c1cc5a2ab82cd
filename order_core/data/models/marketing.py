from sqlalchemy import Column, String, Boolean
import uuid

from order_core.data.database import Base


# Owned by the marketing subsystem; the dashboard only counts active rows.
class BannerModel(Base):
    __tablename__ = "banners"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    active = Column(Boolean, nullable=False, default=True)


class CouponModel(Base):
    __tablename__ = "coupons"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(50), nullable=False, unique=True)
    active = Column(Boolean, nullable=False, default=True)
