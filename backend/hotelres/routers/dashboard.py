"""
Dashboard routes
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from hotelres.database import get_db
from hotelres.exceptions import HotelError
from hotelres.models.schemas import AdminStats, CustomerSummary
from hotelres.security.auth import get_caller, require_admin
from hotelres.security.policies import Caller
from hotelres.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/admin", response_model=AdminStats)
def admin_dashboard(
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Headline counts for administrators"""
    try:
        return DashboardService(db).admin_stats(caller)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/me", response_model=CustomerSummary)
def customer_dashboard(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """The caller's own reservation counts"""
    return DashboardService(db).customer_summary(caller)
