# order_core/api/routers/orders.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from order_core.api.deps import get_lock_service
from order_core.api.errors import as_http_error
from order_core.data.database import get_db
from order_core.domain.errors import OrderCoreError
from order_core.domain.filters import OrderFilter
from order_core.domain.paging import normalize_paging
from order_core.domain.schemas import (
    OrderCreate,
    OrderUpdate,
    OrderUpdateRequest,
    OrderOut,
    OrderPage,
    OrderSummaryOut,
)
from order_core.domain.validators import resolve_status, resolve_payment_status, parse_date
from order_core.services.lock_service import LockService
from order_core.services.order_service import OrderService
from order_core.utils.settings import DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session, lock_service: LockService | None = None):
    return OrderService(db, lock_service=lock_service)


def _build_filter(keyword, customer_id, status, payment_status, start_date, end_date) -> OrderFilter:
    # unknown tokens and bad dates are rejected here, before the query engine
    return OrderFilter.build(
        keyword=keyword,
        customer_id=customer_id,
        status=resolve_status(status),
        payment_status=resolve_payment_status(payment_status),
        start_date=parse_date(start_date),
        end_date=parse_date(end_date),
    )


@router.get("", response_model=OrderPage)
def search_orders(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    keyword: Optional[str] = None,
    customer_id: Optional[str] = None,
    status: Optional[str] = None,
    payment_status: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    sort_by: str = "created_at",
    sort_dir: str = "desc",
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        order_filter = _build_filter(keyword, customer_id, status, payment_status, start_date, end_date)
        return svc.search_orders(order_filter, normalize_paging(page, size, sort_by, sort_dir))
    except OrderCoreError as e:
        raise as_http_error(e)


@router.get("/summary", response_model=OrderSummaryOut)
def summarize_orders(
    keyword: Optional[str] = None,
    customer_id: Optional[str] = None,
    status: Optional[str] = None,
    payment_status: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        order_filter = _build_filter(keyword, customer_id, status, payment_status, start_date, end_date)
        return svc.summarize_orders(order_filter)
    except OrderCoreError as e:
        raise as_http_error(e)


@router.get("/number/{order_number}", response_model=OrderOut)
def get_order_by_number(order_number: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_order_by_number(order_number)
    except OrderCoreError as e:
        raise as_http_error(e)


@router.get("/customer/{customer_id}", response_model=List[OrderOut])
def list_customer_orders(customer_id: str, db: Session = Depends(get_db)):
    return get_service(db).list_orders_for_customer(customer_id)


@router.get("/customer/{customer_id}/page", response_model=OrderPage)
def list_customer_orders_page(
    customer_id: str,
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.list_orders_for_customer_page(customer_id, normalize_paging(page, size))


@router.get("/status/{status}", response_model=OrderPage)
def list_orders_by_status(
    status: str,
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.list_orders_by_status(resolve_status(status, required=True), normalize_paging(page, size))
    except OrderCoreError as e:
        raise as_http_error(e)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_order(order_id)
    except OrderCoreError as e:
        raise as_http_error(e)


@router.post("/{customer_id}", response_model=OrderOut, status_code=201)
def create_order(
    customer_id: str,
    payload: OrderCreate,
    db: Session = Depends(get_db),
):
    """
    Creates an order from the given cart items of the customer.
    """
    svc = get_service(db)
    try:
        return svc.create_order(customer_id, payload)
    except OrderCoreError as e:
        raise as_http_error(e)


@router.put("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: str,
    payload: OrderUpdateRequest,
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    try:
        update = OrderUpdate(
            status=resolve_status(payload.status),
            payment_status=resolve_payment_status(payload.payment_status),
            admin_notes=payload.admin_notes,
        )
        return svc.update_order(order_id, update)
    except OrderCoreError as e:
        raise as_http_error(e)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: str,
    status: str = Query(...),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    try:
        return svc.update_order_status(order_id, resolve_status(status, required=True))
    except OrderCoreError as e:
        raise as_http_error(e)


@router.put("/{order_id}/payment-status", response_model=OrderOut)
def update_payment_status(
    order_id: str,
    payment_status: str = Query(...),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    try:
        return svc.update_payment_status(order_id, resolve_payment_status(payment_status, required=True))
    except OrderCoreError as e:
        raise as_http_error(e)
