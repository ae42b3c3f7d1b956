from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from backend.config import DB_URL


def _connect_args(url: str) -> dict:
    # SQLite(로컬/테스트)는 요청 스레드가 달라도 같은 연결 사용
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(DB_URL, pool_pre_ping=True, connect_args=_connect_args(DB_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

class Base(DeclarativeBase):
    """users / profiles / user_goals / meals 테이블 공통 베이스"""

def get_db():
    """요청 단위 세션"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
