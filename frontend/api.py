
import base64
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests
from dotenv import load_dotenv

load_dotenv()


def _get_base() -> str:
    """
    백엔드 베이스 URL 결정 우선순위:
    1) 환경변수 API_BASE_URL
    2) Streamlit secrets["backend_base"]
    3) 기본값 "http://127.0.0.1:8000"
    """
    base = os.getenv("API_BASE_URL")
    if base:
        return base.rstrip("/")

    try:
        import streamlit as st
        base = st.secrets.get("backend_base")
        if base:
            return str(base).rstrip("/")
    except Exception:
        # secrets.toml 없음
        pass

    return "http://127.0.0.1:8000"


BASE_URL = _get_base()
TIMEOUT = 30
AI_TIMEOUT = 90


@dataclass
class Notice:
    kind: str       # auth | profile_incomplete | rate_limited | quota | invalid | error | network
    message: str


@dataclass
class ApiResult:
    data: Any = None
    notice: Optional[Notice] = None

    @property
    def ok(self) -> bool:
        return self.notice is None


RATE_LIMIT_MESSAGE = "Too many requests right now. Please try again shortly."
QUOTA_MESSAGE = "The AI service is unavailable. Please top up credits to continue."
AUTH_MESSAGE = "Please sign in to continue."
PROFILE_INCOMPLETE_MESSAGE = "Please complete your profile (height and weight) before chatting with the advisor."


def _auth(token: Optional[str]):
    return {"Authorization": f"Bearer {token}"} if token else {}


def _error_text(res: requests.Response) -> str:
    try:
        j = res.json()
    except ValueError:
        return f"HTTP {res.status_code}: {res.text[:300]}"
    if isinstance(j, dict):
        detail = j.get("error") or j.get("detail")
        if isinstance(detail, list):   # FastAPI 422
            detail = "; ".join(str(d.get("msg", d)) for d in detail)
        if detail:
            return str(detail)
    return f"HTTP {res.status_code}"


def notice_for(res: requests.Response, failure: str = "Request failed") -> Notice:
    """HTTP 오류 응답 → 사용자 알림 (429 / 402 / 401 은 각각 구분)"""
    code = res.status_code
    if code == 429:
        return Notice("rate_limited", RATE_LIMIT_MESSAGE)
    if code == 402:
        return Notice("quota", QUOTA_MESSAGE)
    if code == 401:
        return Notice("auth", AUTH_MESSAGE)
    if code in (400, 409, 413, 415, 422):
        return Notice("invalid", f"{failure}: {_error_text(res)}")
    return Notice("error", f"{failure}: {_error_text(res)}")


def _call(method: str, path: str, failure: str, token: Optional[str] = None,
          timeout: int = TIMEOUT, **kwargs) -> ApiResult:
    url = f"{BASE_URL}{path}"
    try:
        res = requests.request(method, url, headers=_auth(token), timeout=timeout, **kwargs)
    except requests.exceptions.RequestException as e:
        return ApiResult(notice=Notice("network", f"{failure}: network error ({e})"))

    if not res.ok:
        return ApiResult(notice=notice_for(res, failure))
    try:
        return ApiResult(data=res.json())
    except ValueError:
        return ApiResult(notice=Notice("error", f"{failure}: unexpected response (non-JSON)"))


def to_data_uri(file_bytes: bytes, mime: str = "image/jpeg") -> str:
    return f"data:{mime};base64,{base64.b64encode(file_bytes).decode('ascii')}"


def profile_is_complete(profile: Optional[Mapping[str, Any]]) -> bool:
    if not profile:
        return False
    return profile.get("height") not in (None, "") and profile.get("weight") not in (None, "")


# ─────────────────────────────────────
# 인증
# ─────────────────────────────────────
def signup(username: str, password: str) -> ApiResult:
    """POST /auth/signup"""
    return _call("POST", "/auth/signup", "Signup failed",
                 json={"username": username, "password": password})


def login(username: str, password: str) -> ApiResult:
    """
    POST /auth/login
    기대: {"access_token": "...", "token_type":"bearer", "username":"..."}
    """
    result = _call("POST", "/auth/login", "Login failed",
                   json={"username": username, "password": password})
    if result.notice and result.notice.kind == "auth":
        return ApiResult(notice=Notice("auth", "Incorrect username or password."))
    return result


# ─────────────────────────────────────
# 프로필 / 식사
# ─────────────────────────────────────
def get_profile(token: Optional[str]) -> ApiResult:
    """GET /profile/me → {"profile": ..., "goal": ..., "complete": bool}"""
    return _call("GET", "/profile/me", "Could not load profile", token)


def save_profile(token: Optional[str], profile: dict, goal: dict) -> ApiResult:
    return _call("PUT", "/profile/me", "Could not save profile", token,
                 json={"profile": profile, "goal": goal})


def save_meal(token: Optional[str], analysis: dict, image: Optional[str] = None) -> ApiResult:
    """POST /meals: 분석 결과를 식단 일지에 저장"""
    return _call("POST", "/meals", "Could not save meal", token,
                 json={"analysis": analysis, "image": image})


def get_dashboard(token: Optional[str]) -> ApiResult:
    """GET /dashboard/today"""
    return _call("GET", "/dashboard/today", "Could not load dashboard", token)


def get_history(token: Optional[str], days: int = 7) -> ApiResult:
    """GET /history?days=N"""
    return _call("GET", "/history", "Could not load history", token, params={"days": int(days)})


# ─────────────────────────────────────
# AI 기능
# ─────────────────────────────────────
def analyze_food(token: Optional[str], image_data_uri: str) -> ApiResult:
    """POST /functions/analyze-food → data = AnalysisResult dict"""
    result = _call("POST", "/functions/analyze-food", "Analysis failed", token,
                   timeout=AI_TIMEOUT, json={"image": image_data_uri})
    if result.ok:
        return ApiResult(data=result.data.get("analysis"))
    return result


def chat_precondition(token: Optional[str], profile: Optional[Mapping[str, Any]]) -> Optional[Notice]:
    """로그인 / 프로필(키·몸무게) 미완성이면 알림 1건, 통과하면 None"""
    if not token:
        return Notice("auth", AUTH_MESSAGE)
    if not profile_is_complete(profile):
        return Notice("profile_incomplete", PROFILE_INCOMPLETE_MESSAGE)
    return None


def send_chat(token: Optional[str], message: str, profile: Optional[Mapping[str, Any]]) -> ApiResult:
    """
    POST /functions/chat-advisor → data = 답변 텍스트
    전제조건 불충족 시 네트워크 호출 없이 거절.
    """
    blocked = chat_precondition(token, profile)
    if blocked:
        return ApiResult(notice=blocked)

    result = _call("POST", "/functions/chat-advisor", "Failed to get response", token,
                   timeout=AI_TIMEOUT, json={"message": message, "userProfile": dict(profile)})
    if not result.ok:
        return result
    reply = (result.data or {}).get("response")
    if not isinstance(reply, str):
        return ApiResult(notice=Notice("error", "Failed to get response: invalid reply"))
    return ApiResult(data=reply)


def generate_recipes(token: Optional[str], image_data_uri: str) -> ApiResult:
    """POST /functions/generate-recipes → data = {"ingredients": [...], "recipes": [...]}"""
    return _call("POST", "/functions/generate-recipes", "Failed to generate recipes", token,
                 timeout=AI_TIMEOUT, json={"imageBase64": image_data_uri})


__all__ = [
    "Notice",
    "ApiResult",
    "signup",
    "login",
    "get_profile",
    "save_profile",
    "save_meal",
    "get_dashboard",
    "get_history",
    "analyze_food",
    "chat_precondition",
    "send_chat",
    "generate_recipes",
    "to_data_uri",
]
