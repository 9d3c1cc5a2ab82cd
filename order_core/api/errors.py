# order_core/api/errors.py
from fastapi import HTTPException

from order_core.domain.errors import (
    OrderCoreError,
    NotFoundError,
    ValidationError,
    InsufficientStockError,
    InvalidTransitionError,
    ConcurrencyConflictError,
)

_STATUS_CODES = (
    (NotFoundError, 404),
    (ValidationError, 400),
    (InsufficientStockError, 409),
    (InvalidTransitionError, 409),
    (ConcurrencyConflictError, 409),
)


def as_http_error(error: OrderCoreError) -> HTTPException:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.to_dict())
    return HTTPException(status_code=400, detail=error.to_dict())
