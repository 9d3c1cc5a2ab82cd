# order_core/domain/errors.py
"""
Business errors raised by the order core.

Each error has a stable ``code`` and a human readable message; the HTTP layer
maps them to status codes (see ``order_core.api.errors``). Storage and
transport faults are not wrapped and surface as generic failures.
"""


class OrderCoreError(Exception):
    code = "order_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class NotFoundError(OrderCoreError, LookupError):
    code = "not_found"

    def __init__(self, resource: str, field: str, value):
        super().__init__(f"{resource} not found with {field}: {value}")
        self.resource = resource
        self.field = field
        self.value = value


class ValidationError(OrderCoreError, ValueError):
    code = "validation_error"


class InsufficientStockError(OrderCoreError, ValueError):
    code = "insufficient_stock"

    def __init__(self, product_name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {product_name}: requested {requested}, available {available}"
        )
        self.product_name = product_name
        self.requested = requested
        self.available = available

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            product_name=self.product_name,
            requested=self.requested,
            available=self.available,
        )
        return data


class InvalidTransitionError(OrderCoreError, ValueError):
    code = "invalid_transition"

    def __init__(self, current, requested):
        super().__init__(f"Cannot change order status from {current.value} to {requested.value}")
        self.current = current
        self.requested = requested

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(current=self.current.value, requested=self.requested.value)
        return data


class ConcurrencyConflictError(OrderCoreError, RuntimeError):
    code = "concurrency_conflict"
