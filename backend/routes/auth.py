import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models.user import User
from backend.schemas.user_schema import UserCreate, UserLogin, UserOut, TokenResponse
from backend.utils.security import hash_password, verify_password, create_access_token, subject_from_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_user(token: str | None, db: Session) -> tuple[User | None, str]:
    """(사용자, 실패 사유). 요청마다 새로 조회 (사용자 캐시하지 않음)"""
    if not token:
        return None, "Unauthorized - Missing authentication"
    username = subject_from_token(token)
    user = db.query(User).filter(User.username == username).first() if username else None
    if not user:
        return None, "Unauthorized - Invalid token"
    return user, ""


def get_current_user(token: str | None = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    user, reason = resolve_user(token, db)
    if user is None:
        logger.warning("Rejected request: %s", reason)
        raise _unauthorized(reason)
    return user


@router.post("/signup")
def signup(payload: UserCreate, db: Session = Depends(get_db)):
    # 아이디 중복 체크
    if db.query(User).filter(User.username == payload.username).first():
        raise HTTPException(400, "Username already exists.")
    user = User(
        username=payload.username,
        password=hash_password(payload.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("New user signed up: %s", user.username)
    return {"message": "Signup successful", "user": UserOut.model_validate(user)}

@router.post("/login", response_model=TokenResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == payload.username).first()
    if not user or not verify_password(payload.password, user.password):
        raise HTTPException(401, "Incorrect username or password.")
    token = create_access_token(user.username)
    return TokenResponse(access_token=token, username=user.username)

@router.post("/token", response_model=TokenResponse)
def token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == form.username).first()
    if not user or not verify_password(form.password, user.password):
        raise HTTPException(401, "Incorrect username or password.")
    access_token = create_access_token(user.username)
    return TokenResponse(access_token=access_token, username=user.username)

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user
