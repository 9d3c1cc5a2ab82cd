"""Row builders shared by the test modules."""
from datetime import datetime
from decimal import Decimal
import uuid

from order_core.data.models import (
    UserModel,
    ProductModel,
    CartItemModel,
    OrderModel,
    BannerModel,
    CouponModel,
)
from order_core.domain.enums import OrderStatus, PaymentStatus, ProductStatus, UserRole
from order_core.domain.schemas import OrderCreate


def make_user(db, username="alice", email=None, full_name=None, role=UserRole.USER, created_at=None):
    user = UserModel(
        username=username,
        email=email or f"{username}@example.com",
        full_name=full_name,
        role=role,
    )
    if created_at is not None:
        user.created_at = created_at
    db.add(user)
    db.commit()
    return user


def make_product(db, name="Keyboard", price="100.00", discount_price=None, stock=5):
    product = ProductModel(
        name=name,
        price=Decimal(price),
        discount_price=Decimal(discount_price) if discount_price is not None else None,
        stock_quantity=stock,
        status=ProductStatus.ACTIVE,
    )
    db.add(product)
    db.commit()
    return product


def make_cart_item(db, user, product, quantity=1):
    item = CartItemModel(user_id=user.id, product_id=product.id, quantity=quantity)
    db.add(item)
    db.commit()
    return item


def make_order(
    db,
    user,
    status=OrderStatus.PENDING,
    payment_status=PaymentStatus.PENDING,
    total="10.00",
    created_at=None,
    order_number=None,
    shipping_name="Alice Doe",
    shipping_phone="555-0100",
):
    created_at = created_at or datetime(2026, 3, 1, 12, 0)
    order = OrderModel(
        user_id=user.id,
        order_number=order_number or f"ORD-TEST-{uuid.uuid4().hex[:8].upper()}",
        total_amount=Decimal(total),
        shipping_address="1 Main St",
        shipping_phone=shipping_phone,
        shipping_name=shipping_name,
        status=status,
        payment_status=payment_status,
        created_at=created_at,
        updated_at=created_at,
    )
    db.add(order)
    db.commit()
    return order


def checkout_request(*cart_item_ids, **overrides):
    data = {
        "shipping_address": "1 Main St, Springfield",
        "shipping_phone": "555-0100",
        "shipping_name": "Alice Doe",
        "payment_method": "COD",
        "notes": "leave at the door",
        "cart_item_ids": [getattr(i, "id", i) for i in cart_item_ids],
    }
    data.update(overrides)
    return OrderCreate(**data)


def make_banner(db, active=True):
    banner = BannerModel(title="Sale", active=active)
    db.add(banner)
    db.commit()
    return banner


def make_coupon(db, code, active=True):
    coupon = CouponModel(code=code, active=active)
    db.add(coupon)
    db.commit()
    return coupon
