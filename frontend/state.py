from enum import Enum
from typing import Any, MutableMapping, Optional

import streamlit as st


class View(str, Enum):
    DASHBOARD = "dashboard"
    CAPTURE = "capture"
    HISTORY = "history"
    RECIPES = "recipes"
    CHAT = "chat"
    PROFILE = "profile"


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


GREETING = (
    "Hi! I'm your AI nutrition and fitness advisor. "
    "Ask me anything about diet, workouts, or healthy living!"
)


def _state(state: Optional[MutableMapping] = None) -> MutableMapping:
    return st.session_state if state is None else state


def init_state(state: Optional[MutableMapping] = None):
    s = _state(state)
    defaults = {
        "access_token": None,
        "username": None,
        "active_view": View.DASHBOARD.value,
        "requests": {v.value: {"status": RequestStatus.IDLE.value, "ticket": 0} for v in View},
        "ticket_seq": 0,
        # 캡처 세션
        "capture_image": None,
        "capture_analysis": None,
        # 남은 재료 레시피 세션
        "leftover_image": None,
        "recipes": None,
        # 채팅 세션 (새로고침 시 초기화)
        "chat_messages": [{"id": "1", "role": "assistant", "content": GREETING}],
        "chat_profile": None,
    }
    for k, v in defaults.items():
        if k not in s:
            s[k] = v


def logout(state: Optional[MutableMapping] = None):
    s = _state(state)
    for k in list(s.keys()):
        del s[k]
    init_state(s)


def set_view(view: View, state: Optional[MutableMapping] = None):
    _state(state)["active_view"] = View(view).value


def enter_view(view: View, state: Optional[MutableMapping] = None):
    """
    페이지 스크립트 시작 시 호출.
    요청은 한 번의 스크립트 실행 안에서만 진행되므로, 이 시점에 남아 있는
    loading 은 중단된 이전 실행의 흔적 → idle 로 되돌림.
    """
    s = _state(state)
    set_view(view, s)
    slot = s["requests"][View(view).value]
    if slot["status"] == RequestStatus.LOADING.value:
        slot["status"] = RequestStatus.IDLE.value


def active_view(state: Optional[MutableMapping] = None) -> View:
    return View(_state(state).get("active_view", View.DASHBOARD.value))


def request_status(view: View, state: Optional[MutableMapping] = None) -> RequestStatus:
    return RequestStatus(_state(state)["requests"][View(view).value]["status"])


def is_busy(view: View, state: Optional[MutableMapping] = None) -> bool:
    return request_status(view, state) is RequestStatus.LOADING


def begin_request(view: View, state: Optional[MutableMapping] = None) -> int:
    """
    요청 시작: 새 티켓 발급 + 해당 뷰 loading.
    티켓은 전체에서 단조 증가.
    """
    s = _state(state)
    s["ticket_seq"] += 1
    ticket = s["ticket_seq"]
    s["requests"][View(view).value] = {"status": RequestStatus.LOADING.value, "ticket": ticket}
    return ticket


def finish_request(
    view: View,
    ticket: int,
    ok: bool,
    key: Optional[str] = None,
    value: Any = None,
    state: Optional[MutableMapping] = None,
) -> bool:
    """
    결과 반영. 더 최신 티켓이 있거나 사용자가 다른 뷰로 이동했으면 버리고 False.
    key 가 주어지면 성공 시 state[key] = value.
    """
    s = _state(state)
    view = View(view)
    slot = s["requests"][view.value]
    if slot["ticket"] != ticket:
        return False
    if active_view(s) is not view:
        # 결과는 버리고 슬롯만 해제
        slot["status"] = RequestStatus.IDLE.value
        return False

    slot["status"] = (RequestStatus.SUCCESS if ok else RequestStatus.ERROR).value
    if ok and key is not None:
        s[key] = value
    return True


def reset_request(view: View, state: Optional[MutableMapping] = None):
    s = _state(state)
    s["requests"][View(view).value]["status"] = RequestStatus.IDLE.value
