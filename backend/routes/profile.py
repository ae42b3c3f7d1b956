from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models.user import User
from backend.routes.auth import get_current_user
from backend.schemas.profile_schema import ProfileBundle, ProfileUpdate
from backend.services.profile_service import get_bundle, upsert_bundle

router = APIRouter(prefix="/profile", tags=["Profile"])

@router.get("/me", response_model=ProfileBundle)
def read_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_bundle(db, user.id)

@router.put("/me", response_model=ProfileBundle)
def save_profile(payload: ProfileUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return upsert_bundle(db, user.id, payload)
