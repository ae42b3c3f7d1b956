import base64
import io
import json
import os

os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("API_BASE_URL", "http://backend.test")

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend import config
from backend.database import Base, get_db
from backend.main import app
from backend.models.user import User
from backend.utils.security import hash_password


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else (json.dumps(body) if body is not None else "")
        self.headers = {"content-type": "application/json"}

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json body")
        return self._body


def completion(content):
    """chat-completions 응답 바디"""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeGateway:
    def __init__(self):
        self.responses = []
        self.calls = []

    def reply(self, content=None, status_code=200, body=None, text=None):
        if body is None and content is not None:
            body = completion(content)
        self.responses.append(FakeResponse(status_code, body, text))

    def raise_error(self, exc):
        self.responses.append(exc)

    def __call__(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if not self.responses:
            raise AssertionError("unexpected gateway call")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def gateway(monkeypatch):
    fake = FakeGateway()
    monkeypatch.setattr(config, "AI_GATEWAY_API_KEY", "test-key")
    monkeypatch.setattr("backend.utils.gateway.requests.post", fake)
    return fake


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory, tmp_path, monkeypatch):
    monkeypatch.setattr(config, "UPLOAD_DIR", str(tmp_path / "uploads"))

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    u = User(username="alice", password=hash_password("secret123"))
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def auth_headers(client):
    res = client.post("/auth/signup", json={"username": "bob", "password": "pw1234"})
    assert res.status_code == 200
    res = client.post("/auth/login", json={"username": "bob", "password": "pw1234"})
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def image_data_uri():
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), (200, 120, 40)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def analysis_payload():
    return {
        "name": "Grilled Chicken Salad",
        "servingSize": "1 bowl (350g)",
        "calories": 385,
        "macros": {
            "protein": {"amount": 42, "percentage": 84},
            "carbs": {"amount": 28, "percentage": 9},
            "fats": {"amount": 12, "percentage": 17},
        },
        "nutrients": [
            {"name": "Dietary Fiber", "amount": "8g", "daily": 32},
            {"name": "Sodium", "amount": "420mg", "daily": 18},
        ],
        "ingredients": ["Grilled chicken breast", "Mixed greens", "Cherry tomatoes"],
        "healthScore": 92,
    }
