# order_core/services/dashboard_service.py
from datetime import datetime, date, time, timedelta
from decimal import Decimal
from typing import Callable

from sqlalchemy.orm import Session

from order_core.data.models.order import OrderModel
from order_core.domain.enums import OrderStatus, PaymentStatus
from order_core.domain.schemas import (
    DashboardOut,
    DashboardSummaryOut,
    RevenueTrendPointOut,
    RecentOrderOut,
)
from order_core.repos.marketing_repo import MarketingRepo
from order_core.repos.order_repo import OrderRepo
from order_core.repos.product_repo import ProductRepo
from order_core.repos.user_repo import UserRepo
from order_core.services.order_service import to_money
from order_core.utils.clock import utcnow
from order_core.utils.settings import LOW_STOCK_THRESHOLD, REVENUE_TREND_DAYS, RECENT_ORDER_LIMIT


TRAILING_WINDOW = timedelta(days=30)


class DashboardService:
    """Admin overview: headline counters, daily paid revenue, latest orders."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)
        self.marketing = MarketingRepo(db)
        self.clock = clock

    def overview(self) -> DashboardOut:
        now = self.clock()

        return DashboardOut(
            summary=self.summary(now),
            revenue_trend=self.revenue_trend(now.date()),
            recent_orders=self.recent_orders(),
        )

    def summary(self, now: datetime) -> DashboardSummaryOut:
        since = now - TRAILING_WINDOW
        return DashboardSummaryOut(
            total_revenue=to_money(self.orders.sum_total_by_payment_status(PaymentStatus.PAID)),
            revenue_30_days=to_money(self.orders.sum_total_by_payment_status(PaymentStatus.PAID, since=since)),
            total_orders=self.orders.count(),
            pending_orders=self.orders.count(OrderStatus.PENDING),
            delivered_orders=self.orders.count(OrderStatus.DELIVERED),
            total_customers=self.users.count_customers(),
            new_customers=self.users.count_customers(since=since),
            total_products=self.products.count_products(),
            low_stock_products=self.products.count_low_stock(LOW_STOCK_THRESHOLD),
            active_banners=self.marketing.count_active_banners(),
            active_coupons=self.marketing.count_active_coupons(),
        )

    def revenue_trend(self, today: date, days: int = REVENUE_TREND_DAYS) -> list[RevenueTrendPointOut]:
        """One point per calendar day, oldest first; days without paid orders stay at zero."""
        start = today - timedelta(days=days - 1)

        points = {}
        for offset in range(days):
            day = start + timedelta(days=offset)
            points[day] = {"revenue": Decimal("0"), "order_count": 0}

        paid = self.orders.find_by_payment_status_between(
            PaymentStatus.PAID,
            datetime.combine(start, time.min),
            datetime.combine(today, time.max),
        )
        for created_at, amount in paid:
            point = points.get(created_at.date())
            if point is not None:
                point["revenue"] += Decimal(str(amount or 0))
                point["order_count"] += 1

        return [
            RevenueTrendPointOut(date=day, revenue=to_money(p["revenue"]), order_count=p["order_count"])
            for day, p in points.items()
        ]

    def recent_orders(self, limit: int = RECENT_ORDER_LIMIT) -> list[RecentOrderOut]:
        return [self._to_recent(order) for order in self.orders.recent(limit)]

    @staticmethod
    def _to_recent(order: OrderModel) -> RecentOrderOut:
        return RecentOrderOut(
            id=order.id,
            order_number=order.order_number,
            customer_name=order.customer.display_name if order.customer is not None else None,
            total_amount=order.total_amount,
            status=order.status,
            payment_status=order.payment_status,
            created_at=order.created_at,
        )
