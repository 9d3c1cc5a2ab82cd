# order_core/api/deps.py
from functools import lru_cache

from order_core.services.lock_service import LockService


@lru_cache(maxsize=1)
def get_lock_service() -> LockService:
    # one connection pool per process
    return LockService()
