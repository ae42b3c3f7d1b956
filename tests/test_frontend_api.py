import pytest
import requests

import api


class Recorder:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def http(monkeypatch):
    def install(response=None, error=None):
        rec = Recorder(response, error)
        monkeypatch.setattr(api.requests, "request", rec)
        return rec
    return install


COMPLETE = {"height": 170, "weight": 65}


def test_chat_without_token_makes_no_call(http):
    rec = http()
    res = api.send_chat(None, "hi", COMPLETE)
    assert res.notice.kind == "auth"
    assert rec.calls == []


@pytest.mark.parametrize("profile", [None, {}, {"height": 170}, {"height": 170, "weight": ""}])
def test_chat_with_incomplete_profile_makes_no_call(http, profile):
    rec = http()
    res = api.send_chat("token", "hi", profile)
    assert res.notice.kind == "profile_incomplete"
    assert res.notice.message == api.PROFILE_INCOMPLETE_MESSAGE
    assert rec.calls == []


def test_chat_success(http, fake_response):
    rec = http(fake_response(200, {"response": "Drink water."}))
    res = api.send_chat("token", "hi", COMPLETE)

    assert res.ok
    assert res.data == "Drink water."
    method, url, kwargs = rec.calls[0]
    assert method == "POST"
    assert url.endswith("/functions/chat-advisor")
    assert kwargs["headers"] == {"Authorization": "Bearer token"}
    assert kwargs["json"] == {"message": "hi", "userProfile": COMPLETE}


def test_chat_non_text_reply(http, fake_response):
    http(fake_response(200, {"response": {"text": "nope"}}))
    res = api.send_chat("token", "hi", COMPLETE)
    assert res.notice.kind == "error"


def test_analysis_failures_get_distinct_notices(http, fake_response):
    notices = []
    for code in (429, 402, 500):
        http(fake_response(code, {"error": "upstream"}))
        notices.append(api.analyze_food("token", "data:image/png;base64,AAAA").notice)

    assert [n.kind for n in notices] == ["rate_limited", "quota", "error"]
    assert len({n.message for n in notices}) == 3


def test_expired_session_is_auth_notice(http, fake_response):
    http(fake_response(401, {"error": "Unauthorized - Invalid token"}))
    assert api.get_dashboard("stale").notice.kind == "auth"


def test_validation_error_message(http, fake_response):
    http(fake_response(422, {"detail": [{"msg": "field required"}]}))
    res = api.save_profile("token", {}, {})
    assert res.notice.kind == "invalid"
    assert "field required" in res.notice.message


def test_network_error(http):
    http(error=requests.exceptions.ConnectionError("refused"))
    assert api.get_history("token").notice.kind == "network"


def test_login_failure_message(http, fake_response):
    http(fake_response(401, {"detail": "Incorrect username or password."}))
    res = api.login("someone", "bad")
    assert res.notice.message == "Incorrect username or password."


def test_analyze_food_unwraps_analysis(http, fake_response, analysis_payload):
    rec = http(fake_response(200, {"analysis": analysis_payload}))
    res = api.analyze_food("token", "data:image/png;base64,AAAA")
    assert res.data["name"] == "Grilled Chicken Salad"
    assert rec.calls[0][2]["json"] == {"image": "data:image/png;base64,AAAA"}


def test_generate_recipes_uses_image_base64_field(http, fake_response):
    rec = http(fake_response(200, {"ingredients": [], "recipes": []}))
    api.generate_recipes("token", "data:image/png;base64,AAAA")
    assert rec.calls[0][2]["json"] == {"imageBase64": "data:image/png;base64,AAAA"}


def test_to_data_uri():
    assert api.to_data_uri(b"hi", "image/png") == "data:image/png;base64,aGk="
