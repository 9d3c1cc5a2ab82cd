# order_core/services/order_service.py
from decimal import Decimal, ROUND_HALF_UP
import math
import uuid

from sqlalchemy.orm import Session

from order_core.data.models.cart_item import CartItemModel
from order_core.data.models.order import OrderModel
from order_core.data.models.order_item import OrderItemModel
from order_core.domain.enums import OrderStatus, PaymentStatus
from order_core.domain.errors import (
    NotFoundError,
    ValidationError,
    InsufficientStockError,
    ConcurrencyConflictError,
)
from order_core.domain.filters import OrderFilter, StatusCriterion
from order_core.domain.lifecycle import validate_transition
from order_core.domain.paging import PageRequest
from order_core.domain.schemas import OrderCreate, OrderUpdate, OrderOut, OrderPage, OrderSummaryOut
from order_core.repos.cart_repo import CartRepo
from order_core.repos.order_repo import OrderRepo
from order_core.repos.product_repo import ProductRepo
from order_core.repos.user_repo import UserRepo
from order_core.services.lock_service import LockService
from order_core.utils.clock import utcnow
from order_core.utils.settings import ORDER_NUMBER_PREFIX
from order_core.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")

# summary bucket per status; statuses missing here are counted only in the total
SUMMARY_BUCKETS = {
    OrderStatus.PENDING: "pending_orders",
    OrderStatus.CONFIRMED: "pending_orders",
    OrderStatus.PROCESSING: "shipping_orders",
    OrderStatus.SHIPPED: "shipping_orders",
    OrderStatus.DELIVERED: "completed_orders",
    OrderStatus.CANCELLED: "cancelled_orders",
    OrderStatus.REFUNDED: "cancelled_orders",
}


def to_money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENT, rounding=ROUND_HALF_UP)


def to_order_out(order: OrderModel) -> OrderOut:
    out = OrderOut.model_validate(order)
    out.username = order.customer.username if order.customer is not None else None
    return out


class OrderService:
    """
    Use cases of the order domain.

    Commands (create, update) run in the session's transaction and either
    commit as a whole or roll back; queries only read.
    """

    def __init__(self, db: Session, lock_service: LockService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.user_repo = UserRepo(db)
        self.lock_service = lock_service

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_order(self, customer_id: str, payload: OrderCreate) -> OrderOut:
        """
        Use Case: turn cart items into an order.

        1. customer exists, cart is not empty, every item belongs to the customer
        2. stock covers every item
        3. line items with a frozen name/price, total = sum of subtotals
        4. stock decremented, order saved, cart items removed - one transaction
        """
        try:
            order = self._build_order(customer_id, payload)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(
            f"Order {order.order_number} created for customer {customer_id}: "
            f"{len(order.items)} item(s), total {order.total_amount}"
        )
        return to_order_out(order)

    def update_order(self, order_id: str, payload: OrderUpdate) -> OrderOut:
        if self.lock_service is None:
            return self._apply_update(order_id, payload)

        with self.lock_service.hold(order_id):
            return self._apply_update(order_id, payload)

    def update_order_status(self, order_id: str, status: OrderStatus) -> OrderOut:
        return self.update_order(order_id, OrderUpdate(status=status))

    def update_payment_status(self, order_id: str, payment_status: PaymentStatus) -> OrderOut:
        return self.update_order(order_id, OrderUpdate(payment_status=payment_status))

    # =====================================================
    # QUERIES
    # =====================================================
    def get_order(self, order_id: str) -> OrderOut:
        return to_order_out(self._require_order(order_id))

    def get_order_by_number(self, order_number: str) -> OrderOut:
        order = self.repo.get_by_order_number(order_number)
        if not order:
            raise NotFoundError("Order", "order_number", order_number)
        return to_order_out(order)

    def list_orders_for_customer(self, customer_id: str) -> list[OrderOut]:
        return [to_order_out(o) for o in self.repo.list_for_customer(customer_id)]

    def list_orders_for_customer_page(self, customer_id: str, page: PageRequest) -> OrderPage:
        return self.search_orders(OrderFilter.build(customer_id=customer_id), page)

    def list_orders_by_status(self, status: OrderStatus, page: PageRequest) -> OrderPage:
        return self.search_orders(OrderFilter((StatusCriterion(status),)), page)

    def search_orders(self, order_filter: OrderFilter | None, page: PageRequest) -> OrderPage:
        orders, total = self.repo.search(order_filter, page)
        return OrderPage(
            items=[to_order_out(o) for o in orders],
            page=page.page,
            size=page.size,
            total_elements=total,
            total_pages=math.ceil(total / page.size) if page.size else 0,
        )

    def summarize_orders(self, order_filter: OrderFilter | None) -> OrderSummaryOut:
        counts = {bucket: 0 for bucket in set(SUMMARY_BUCKETS.values())}
        total_orders = 0
        revenue = Decimal("0")

        for status, payment_status, count, amount in self.repo.status_breakdown(order_filter):
            total_orders += count
            bucket = SUMMARY_BUCKETS.get(status)
            if bucket:
                counts[bucket] += count
            # grouped by (status, payment_status), so an order that is both
            # delivered and paid is still added once
            if status == OrderStatus.DELIVERED or payment_status == PaymentStatus.PAID:
                revenue += Decimal(str(amount or 0))

        return OrderSummaryOut(total_orders=total_orders, total_revenue=to_money(revenue), **counts)

    # =====================================================
    # INTERNALS
    # =====================================================
    def _require_order(self, order_id: str, fresh: bool = False) -> OrderModel:
        order = self.repo.get_order(order_id, fresh=fresh)
        if not order:
            raise NotFoundError("Order", "id", order_id)
        return order

    def _checked_cart_item(self, customer_id: str, item_id: str) -> CartItemModel:
        item = self.cart_repo.get_cart_item(item_id)
        if not item:
            raise NotFoundError("Cart item", "id", item_id)

        if item.user_id != customer_id:
            raise ValidationError("Cart item does not belong to user")

        product = item.product
        if product is None:
            raise NotFoundError("Product", "id", item.product_id)

        if product.stock_quantity < item.quantity:
            logger.info(
                f"Rejecting checkout for {customer_id}: {product.name} "
                f"requested {item.quantity}, available {product.stock_quantity}"
            )
            raise InsufficientStockError(product.name, item.quantity, product.stock_quantity)

        return item

    def _build_order(self, customer_id: str, payload: OrderCreate) -> OrderModel:
        customer = self.user_repo.get_user(customer_id)
        if not customer:
            raise NotFoundError("User", "id", customer_id)

        if not self.cart_repo.list_cart_items(customer_id):
            raise ValidationError("Cart is empty")

        # the same cart item is never consumed twice
        item_ids = list(dict.fromkeys(payload.cart_item_ids))
        if not item_ids:
            raise ValidationError("Cart items are required")

        cart_items = [self._checked_cart_item(customer_id, item_id) for item_id in item_ids]

        now = utcnow()
        order = OrderModel(
            user_id=customer.id,
            order_number=self._generate_order_number(),
            shipping_address=payload.shipping_address,
            shipping_phone=payload.shipping_phone,
            shipping_name=payload.shipping_name,
            payment_method=payload.payment_method,
            notes=payload.notes,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            version=1,
            created_at=now,
            updated_at=now,
        )

        total = Decimal("0.00")
        for position, item in enumerate(cart_items):
            product = item.product
            name = product.name
            price = to_money(product.effective_price)
            subtotal = to_money(price * item.quantity)

            # conditional decrement, loses cleanly to a concurrent checkout
            if not self.product_repo.decrement_stock(product.id, item.quantity):
                available = self.product_repo.get_stock(product.id)
                logger.warning(f"Stock for {name} changed during checkout, {available} left")
                raise InsufficientStockError(name, item.quantity, available)

            if self.product_repo.mark_out_of_stock_if_empty(product.id):
                logger.info(f"Product {product.id} ({name}) is now out of stock")

            order.items.append(
                OrderItemModel(
                    product_id=product.id,
                    position=position,
                    product_name=name,
                    product_price=price,
                    quantity=item.quantity,
                    subtotal=subtotal,
                    created_at=now,
                )
            )
            total += subtotal

        order.total_amount = total
        self.repo.add_order(order)

        for item in cart_items:
            self.cart_repo.delete_cart_item(item)
        self.db.flush()

        return order

    def _apply_update(self, order_id: str, payload: OrderUpdate) -> OrderOut:
        # re-read so the transition is validated against the committed state
        order = self._require_order(order_id, fresh=True)
        values = {}

        if payload.status is not None and payload.status != order.status:
            validate_transition(order.status, payload.status)
            values["status"] = payload.status

        if payload.payment_status is not None and payload.payment_status != order.payment_status:
            values["payment_status"] = payload.payment_status

        if payload.admin_notes is not None:
            notes = payload.admin_notes.strip() or None
            if notes != order.admin_notes:
                values["admin_notes"] = notes

        if not values:
            return to_order_out(order)

        values["updated_at"] = utcnow()
        try:
            if self.repo.update_order_if_version(order.id, order.version, values) != 1:
                raise ConcurrencyConflictError(f"Order {order.order_number} was modified concurrently, reload and retry")
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        self.repo.refresh(order)
        changed = ", ".join(f"{k}={getattr(v, 'value', v)}" for k, v in values.items() if k != "updated_at")
        logger.info(f"Order {order.order_number} updated: {changed}")
        return to_order_out(order)

    def _generate_order_number(self) -> str:
        for _ in range(3):
            number = f"{ORDER_NUMBER_PREFIX}-{utcnow():%Y%m%d}-{uuid.uuid4().hex[:12].upper()}"
            if not self.repo.exists_by_order_number(number):
                return number
        raise ConcurrencyConflictError("Could not allocate a unique order number")
