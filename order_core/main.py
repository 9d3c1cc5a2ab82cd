# order_core/main.py
from fastapi import FastAPI
import uvicorn

from order_core.api.routers import health, orders, dashboard
from order_core.data.database import init_db
from order_core.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(create_tables: bool = True) -> FastAPI:
    if create_tables:
        init_db()
        logger.info("Database tables ready")

    app = FastAPI(
        title="Order Fulfillment Service",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(orders.router)
    app.include_router(dashboard.router)

    return app


def run() -> None:
    # same as `uvicorn --factory order_core.main:create_app`
    uvicorn.run("order_core.main:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
