
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models.user import User
from backend.routes.auth import get_current_user
from backend.schemas.responses import HistoryResponse
from backend.services.history_service import build_history

router = APIRouter(prefix="/history", tags=["History"])

@router.get("", response_model=HistoryResponse, summary="최근 N일 식사 기록",
            description="""
오늘을 포함한 최근 N일의 식사 기록을 날짜별로 제공합니다.

- 일자별: 총 칼로리, 목표, 끼니 수, 식사 목록(이름/칼로리/시간)
- calorie_change: 오늘 - 어제 칼로리
- insights: 평균 칼로리, 목표(±10%) 달성일, 가장 자주 먹은 메뉴
""")
def get_history(
    days: int = Query(7, ge=1, le=30, description="조회 일수 (오늘 포함)"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return build_history(db, user.id, days=days)
