# order_core/repos/order_repo.py
from datetime import datetime
from decimal import Decimal
from functools import singledispatch

from sqlalchemy import select, update, func, or_
from sqlalchemy.orm import Session, selectinload

from order_core.data.models.order import OrderModel
from order_core.data.models.user import UserModel
from order_core.domain.enums import OrderStatus, PaymentStatus
from order_core.domain.filters import (
    OrderFilter,
    KeywordCriterion,
    CustomerCriterion,
    StatusCriterion,
    PaymentStatusCriterion,
    DateRangeCriterion,
)
from order_core.domain.paging import PageRequest


@singledispatch
def compile_criterion(criterion):
    raise TypeError(f"Unsupported order criterion: {criterion!r}")


@compile_criterion.register
def _(criterion: KeywordCriterion):
    escaped = criterion.keyword.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"

    def matches(column):
        return func.lower(column).like(pattern, escape="\\")

    return or_(
        matches(OrderModel.order_number),
        matches(OrderModel.shipping_name),
        matches(OrderModel.shipping_phone),
        OrderModel.customer.has(or_(matches(UserModel.username), matches(UserModel.email))),
    )


@compile_criterion.register
def _(criterion: CustomerCriterion):
    return OrderModel.user_id == criterion.customer_id


@compile_criterion.register
def _(criterion: StatusCriterion):
    return OrderModel.status == criterion.status


@compile_criterion.register
def _(criterion: PaymentStatusCriterion):
    return OrderModel.payment_status == criterion.payment_status


@compile_criterion.register
def _(criterion: DateRangeCriterion):
    clauses = []
    if criterion.start is not None:
        clauses.append(OrderModel.created_at >= criterion.start)
    if criterion.end is not None:
        clauses.append(OrderModel.created_at <= criterion.end)
    return clauses


def compile_filter(order_filter: OrderFilter | None) -> list:
    clauses = []
    for criterion in (order_filter.criteria if order_filter else ()):
        compiled = compile_criterion(criterion)
        if isinstance(compiled, list):
            clauses.extend(compiled)
        else:
            clauses.append(compiled)
    return clauses


def _with_relations(stmt):
    return stmt.options(selectinload(OrderModel.items), selectinload(OrderModel.customer))


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    # =====================================================
    # WRITES (no commit, the service owns the transaction)
    # =====================================================
    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def update_order_if_version(self, order_id: str, expected_version: int, values: dict) -> int:
        """
        Optimistic update: applies ``values`` and bumps the version only if the
        row still carries ``expected_version``. Returns the affected rowcount.
        """
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.version == expected_version,
            )
            .values(version=expected_version + 1, **values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def refresh(self, order: OrderModel) -> OrderModel:
        self.db.refresh(order)
        return order

    # =====================================================
    # LOOKUPS
    # =====================================================
    def get_order(self, order_id: str, fresh: bool = False) -> OrderModel | None:
        stmt = _with_relations(select(OrderModel).where(OrderModel.id == order_id))
        if fresh:
            # overwrite whatever the identity map already holds for this row
            stmt = stmt.execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_order_number(self, order_number: str) -> OrderModel | None:
        return self.db.execute(
            _with_relations(select(OrderModel).where(OrderModel.order_number == order_number))
        ).scalar_one_or_none()

    def exists_by_order_number(self, order_number: str) -> bool:
        return (
            self.db.execute(select(OrderModel.id).where(OrderModel.order_number == order_number)).first()
            is not None
        )

    def list_for_customer(self, user_id: str) -> list[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id)
        )
        return list(self.db.execute(_with_relations(stmt)).scalars())

    def search(self, order_filter: OrderFilter | None, page: PageRequest) -> tuple[list[OrderModel], int]:
        clauses = compile_filter(order_filter)

        total = self.db.execute(select(func.count(OrderModel.id)).where(*clauses)).scalar_one()

        column = getattr(OrderModel, page.sort_by)
        ordering = column.desc() if page.descending else column.asc()
        stmt = (
            select(OrderModel)
            .where(*clauses)
            .order_by(ordering, OrderModel.id)
            .offset(page.offset)
            .limit(page.size)
        )
        return list(self.db.execute(_with_relations(stmt)).scalars()), total

    def recent(self, limit: int) -> list[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc(), OrderModel.id).limit(limit)
        return list(self.db.execute(stmt.options(selectinload(OrderModel.customer))).scalars())

    # =====================================================
    # AGGREGATES
    # =====================================================
    def status_breakdown(self, order_filter: OrderFilter | None) -> list[tuple[OrderStatus, PaymentStatus, int, Decimal]]:
        """(status, payment_status, count, sum(total)) per group of the filtered orders."""
        stmt = (
            select(
                OrderModel.status,
                OrderModel.payment_status,
                func.count(OrderModel.id),
                func.coalesce(func.sum(OrderModel.total_amount), 0),
            )
            .where(*compile_filter(order_filter))
            .group_by(OrderModel.status, OrderModel.payment_status)
        )
        return [tuple(row) for row in self.db.execute(stmt)]

    def count(self, status: OrderStatus | None = None) -> int:
        stmt = select(func.count(OrderModel.id))
        if status is not None:
            stmt = stmt.where(OrderModel.status == status)
        return self.db.execute(stmt).scalar_one()

    def sum_total_by_payment_status(self, payment_status: PaymentStatus, since: datetime | None = None) -> Decimal:
        stmt = select(func.coalesce(func.sum(OrderModel.total_amount), 0)).where(
            OrderModel.payment_status == payment_status
        )
        if since is not None:
            stmt = stmt.where(OrderModel.created_at >= since)
        return Decimal(str(self.db.execute(stmt).scalar_one()))

    def find_by_payment_status_between(
        self, payment_status: PaymentStatus, start: datetime, end: datetime
    ) -> list[tuple[datetime, Decimal]]:
        stmt = select(OrderModel.created_at, OrderModel.total_amount).where(
            OrderModel.payment_status == payment_status,
            OrderModel.created_at >= start,
            OrderModel.created_at <= end,
        )
        return [tuple(row) for row in self.db.execute(stmt)]
