import pytest

from state import (
    GREETING,
    RequestStatus,
    View,
    active_view,
    begin_request,
    enter_view,
    finish_request,
    init_state,
    is_busy,
    logout,
    request_status,
    reset_request,
    set_view,
)


@pytest.fixture
def session():
    s = {}
    init_state(s)
    return s


def test_defaults(session):
    assert session["access_token"] is None
    assert active_view(session) is View.DASHBOARD
    assert session["chat_messages"][0]["content"] == GREETING
    assert all(request_status(v, session) is RequestStatus.IDLE for v in View)


def test_init_keeps_existing_values():
    s = {"access_token": "abc"}
    init_state(s)
    assert s["access_token"] == "abc"


def test_request_lifecycle(session):
    set_view(View.CAPTURE, session)
    ticket = begin_request(View.CAPTURE, session)
    assert is_busy(View.CAPTURE, session)

    assert finish_request(View.CAPTURE, ticket, True, "capture_analysis", {"name": "Soup"}, session)
    assert request_status(View.CAPTURE, session) is RequestStatus.SUCCESS
    assert session["capture_analysis"] == {"name": "Soup"}

    reset_request(View.CAPTURE, session)
    assert request_status(View.CAPTURE, session) is RequestStatus.IDLE


def test_failure_keeps_previous_value(session):
    set_view(View.RECIPES, session)
    session["recipes"] = {"recipes": []}
    ticket = begin_request(View.RECIPES, session)
    assert finish_request(View.RECIPES, ticket, False, "recipes", None, session)
    assert request_status(View.RECIPES, session) is RequestStatus.ERROR
    assert session["recipes"] == {"recipes": []}


def test_stale_ticket_is_discarded(session):
    set_view(View.CAPTURE, session)
    first = begin_request(View.CAPTURE, session)
    second = begin_request(View.CAPTURE, session)
    assert second > first

    assert not finish_request(View.CAPTURE, first, True, "capture_analysis", "old", session)
    assert session["capture_analysis"] is None
    assert is_busy(View.CAPTURE, session)

    assert finish_request(View.CAPTURE, second, True, "capture_analysis", "new", session)
    assert session["capture_analysis"] == "new"


def test_result_discarded_after_leaving_view(session):
    set_view(View.CHAT, session)
    ticket = begin_request(View.CHAT, session)
    set_view(View.DASHBOARD, session)

    assert not finish_request(View.CHAT, ticket, True, "chat_profile", {"height": 1}, session)
    assert session["chat_profile"] is None

    set_view(View.CHAT, session)
    assert not is_busy(View.CHAT, session)
    assert request_status(View.CHAT, session) is RequestStatus.IDLE


def test_interrupted_run_does_not_leave_view_busy(session):
    enter_view(View.CAPTURE, session)
    begin_request(View.CAPTURE, session)
    # 응답 전에 실행이 중단됨: finish_request 호출 없음
    enter_view(View.DASHBOARD, session)
    assert is_busy(View.CAPTURE, session)

    enter_view(View.CAPTURE, session)
    assert not is_busy(View.CAPTURE, session)
    assert active_view(session) is View.CAPTURE


def test_entering_view_keeps_finished_status(session):
    enter_view(View.RECIPES, session)
    ticket = begin_request(View.RECIPES, session)
    finish_request(View.RECIPES, ticket, False, state=session)
    enter_view(View.RECIPES, session)
    assert request_status(View.RECIPES, session) is RequestStatus.ERROR


def test_requests_are_tracked_per_view(session):
    set_view(View.CAPTURE, session)
    begin_request(View.CAPTURE, session)
    assert not is_busy(View.RECIPES, session)


def test_logout_resets_session(session):
    session["access_token"] = "token"
    session["chat_messages"].append({"id": "2", "role": "user", "content": "hi"})
    logout(session)
    assert session["access_token"] is None
    assert len(session["chat_messages"]) == 1
