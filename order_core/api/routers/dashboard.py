# order_core/api/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from order_core.data.database import get_db
from order_core.domain.schemas import DashboardOut
from order_core.services.dashboard_service import DashboardService

router = APIRouter(prefix="/admin/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardOut)
def dashboard_overview(db: Session = Depends(get_db)):
    """
    Counters, 7-day paid revenue trend and the latest orders.
    """
    return DashboardService(db).overview()
