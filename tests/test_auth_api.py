def test_signup_and_login(client):
    res = client.post("/auth/signup", json={"username": "carol", "password": "pass1234"})
    assert res.status_code == 200
    assert res.json()["user"]["username"] == "carol"

    res = client.post("/auth/login", json={"username": "carol", "password": "pass1234"})
    assert res.status_code == 200
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["username"] == "carol"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "carol"


def test_duplicate_username(client):
    client.post("/auth/signup", json={"username": "dave", "password": "pass1234"})
    res = client.post("/auth/signup", json={"username": "dave", "password": "other123"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Username already exists."


def test_wrong_password(client):
    client.post("/auth/signup", json={"username": "erin", "password": "pass1234"})
    res = client.post("/auth/login", json={"username": "erin", "password": "wrong"})
    assert res.status_code == 401


def test_token_form_login(client):
    client.post("/auth/signup", json={"username": "frank", "password": "pass1234"})
    res = client.post("/auth/token", data={"username": "frank", "password": "pass1234"})
    assert res.status_code == 200
    assert res.json()["access_token"]


def test_me_requires_token(client):
    res = client.get("/auth/me")
    assert res.status_code == 401
    assert res.json()["detail"] == "Unauthorized - Missing authentication"


def test_me_rejects_bad_token(client):
    res = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Unauthorized - Invalid token"


def test_short_password_rejected(client):
    res = client.post("/auth/signup", json={"username": "gina", "password": "pw"})
    assert res.status_code == 422


def test_multibyte_password_at_byte_limit_can_log_in(client):
    password = "a" * 71 + "é"
    assert client.post("/auth/signup", json={"username": "hana", "password": password}).status_code == 200
    res = client.post("/auth/login", json={"username": "hana", "password": password})
    assert res.status_code == 200
