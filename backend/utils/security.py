from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext

from backend.config import JWT_SECRET, JWT_ALG, JWT_EXPIRE_MIN

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BCRYPT_MAX_BYTES = 72


def _bcrypt_input(plain: str) -> str:
    """
    bcrypt는 최대 72바이트까지만 허용.
    초과분은 잘라내되 경계에 걸린 멀티바이트 문자는 통째로 버림.
    해싱과 검증 모두 같은 규칙을 써야 함.
    """
    if not isinstance(plain, str):
        plain = str(plain)

    if len(plain.encode("utf-8")) > BCRYPT_MAX_BYTES:
        plain = plain.encode("utf-8")[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")
    return plain


def hash_password(plain: str) -> str:
    return pwd_context.hash(_bcrypt_input(plain))


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(_bcrypt_input(plain), hashed)

def create_access_token(sub: str, expires_minutes: int = JWT_EXPIRE_MIN) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {"sub": sub, "exp": expire}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_token(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])

def subject_from_token(token: str | None) -> str | None:
    """유효한 토큰이면 sub(username), 아니면 None"""
    if not token:
        return None
    try:
        sub = decode_token(token).get("sub")
    except JWTError:
        return None
    return sub or None
