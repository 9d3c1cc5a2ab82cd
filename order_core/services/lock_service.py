from contextlib import contextmanager
import uuid

import redis

from order_core.domain.errors import ConcurrencyConflictError
from order_core.utils.retry import redis_retry
from order_core.utils.settings import REDIS_URL, ORDER_LOCK_TTL_SECONDS
from order_core.utils.logging import get_logger

logger = get_logger(__name__)

# compare-and-delete in one step, Lua scripts run atomically in redis,
# so a lock that expired and was taken by someone else is never deleted
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Per-order mutex in redis.

    - acquire: SET order:{id}:lock <token> NX EX ttl
    - release: only by the holder of the token
    """

    def __init__(self, url: str | None = None, ttl: int = ORDER_LOCK_TTL_SECONDS):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(order_id: str) -> str:
        return f"order:{order_id}:lock"

    @redis_retry()
    def acquire_order_lock(self, order_id: str, token: str) -> bool:
        key = self._key(order_id)
        logger.debug(f"Acquire lock {key}")
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True,
                ex=self.ttl,
            )
        )

    @redis_retry()
    def release_order_lock(self, order_id: str, token: str) -> bool:
        key = self._key(order_id)
        logger.debug(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def hold(self, order_id: str):
        token = uuid.uuid4().hex
        if not self.acquire_order_lock(order_id, token):
            logger.warning(f"Order {order_id} is locked by another operation")
            raise ConcurrencyConflictError(f"Order {order_id} is being modified by another operation")
        try:
            yield
        finally:
            self.release_order_lock(order_id, token)
