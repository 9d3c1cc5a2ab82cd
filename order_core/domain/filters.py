# order_core/domain/filters.py
"""
Order search criteria.

Criteria are plain value objects; the order repository compiles them into
SQL. An ``OrderFilter`` is the conjunction of its criteria, and criteria for
absent inputs are simply never added.
"""
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple, Union

from order_core.domain.enums import OrderStatus, PaymentStatus
from order_core.domain.errors import ValidationError


@dataclass(frozen=True)
class KeywordCriterion:
    """Case-insensitive substring match on number, shipping name/phone, customer username/email."""

    keyword: str


@dataclass(frozen=True)
class CustomerCriterion:
    customer_id: str


@dataclass(frozen=True)
class StatusCriterion:
    status: OrderStatus


@dataclass(frozen=True)
class PaymentStatusCriterion:
    payment_status: PaymentStatus


@dataclass(frozen=True)
class DateRangeCriterion:
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @classmethod
    def from_dates(cls, start_date: Optional[date], end_date: Optional[date]) -> "DateRangeCriterion":
        if start_date and end_date and end_date < start_date:
            raise ValidationError(f"End date {end_date.isoformat()} is before start date {start_date.isoformat()}")
        return cls(
            start=datetime.combine(start_date, time.min) if start_date else None,
            end=datetime.combine(end_date, time.max) if end_date else None,
        )


Criterion = Union[
    KeywordCriterion,
    CustomerCriterion,
    StatusCriterion,
    PaymentStatusCriterion,
    DateRangeCriterion,
]


@dataclass(frozen=True)
class OrderFilter:
    criteria: Tuple[Criterion, ...] = ()

    def and_(self, criterion: Criterion) -> "OrderFilter":
        return OrderFilter(self.criteria + (criterion,))

    @property
    def is_empty(self) -> bool:
        return not self.criteria

    @classmethod
    def build(
        cls,
        keyword: Optional[str] = None,
        customer_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        payment_status: Optional[PaymentStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> "OrderFilter":
        order_filter = cls()

        if keyword is not None and keyword.strip():
            order_filter = order_filter.and_(KeywordCriterion(keyword.strip().lower()))
        if customer_id is not None:
            order_filter = order_filter.and_(CustomerCriterion(customer_id))
        if status is not None:
            order_filter = order_filter.and_(StatusCriterion(status))
        if payment_status is not None:
            order_filter = order_filter.and_(PaymentStatusCriterion(payment_status))
        if start_date is not None or end_date is not None:
            order_filter = order_filter.and_(DateRangeCriterion.from_dates(start_date, end_date))

        return order_filter
