from sqlalchemy import select, func
from sqlalchemy.orm import Session

from order_core.data.models.marketing import BannerModel, CouponModel


class MarketingRepo:
    def __init__(self, db: Session):
        self.db = db

    def count_active_banners(self) -> int:
        return self.db.execute(select(func.count(BannerModel.id)).where(BannerModel.active.is_(True))).scalar_one()

    def count_active_coupons(self) -> int:
        return self.db.execute(select(func.count(CouponModel.id)).where(CouponModel.active.is_(True))).scalar_one()
