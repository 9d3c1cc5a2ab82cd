# order_core/domain/validators.py
from datetime import date
from typing import Optional

from order_core.domain.enums import OrderStatus, PaymentStatus
from order_core.domain.errors import ValidationError


def resolve_status(value: Optional[str], required: bool = False) -> Optional[OrderStatus]:
    if value is None or not value.strip():
        if required:
            raise ValidationError("Order status is required")
        return None
    try:
        return OrderStatus(value.strip().upper())
    except ValueError:
        raise ValidationError(f"Invalid order status: {value}")


def resolve_payment_status(value: Optional[str], required: bool = False) -> Optional[PaymentStatus]:
    if value is None or not value.strip():
        if required:
            raise ValidationError("Payment status is required")
        return None
    try:
        return PaymentStatus(value.strip().upper())
    except ValueError:
        raise ValidationError(f"Invalid payment status: {value}")


def parse_date(value: Optional[str]) -> Optional[date]:
    """ISO ``YYYY-MM-DD``; blank means no bound."""
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid date format: {value}")
