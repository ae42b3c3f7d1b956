
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models.user import User
from backend.routes.auth import get_current_user
from backend.schemas.responses import DashboardResponse
from backend.services.dashboard_service import get_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("/today", response_model=DashboardResponse)
def fetch_dashboard(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_dashboard(db, user.id)
