# order_core/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./orders.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ORDER_LOCK_TTL_SECONDS = int(os.getenv("ORDER_LOCK_TTL_SECONDS", 30))
ORDER_NUMBER_PREFIX = os.getenv("ORDER_NUMBER_PREFIX", "ORD")

# dashboard / reporting
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", 5))
REVENUE_TREND_DAYS = int(os.getenv("REVENUE_TREND_DAYS", 7))
RECENT_ORDER_LIMIT = int(os.getenv("RECENT_ORDER_LIMIT", 5))

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", 10))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", 100))
# keeps offset = page * size inside a 64-bit SQL integer
MAX_PAGE_NUMBER = int(os.getenv("MAX_PAGE_NUMBER", 1_000_000))
