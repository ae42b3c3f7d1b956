def test_empty_profile(client, auth_headers):
    res = client.get("/profile/me", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"profile": None, "goal": None, "complete": False}


def test_upsert_fills_defaults(client, auth_headers):
    res = client.put(
        "/profile/me",
        json={"profile": {"height": 172, "weight": 65.5}, "goal": {"target_weight": 60}},
        headers=auth_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["complete"] is True
    assert body["profile"]["daily_calorie_goal"] == 2000
    assert body["goal"]["weekly_workout_days"] == 3
    assert body["goal"]["target_weight"] == 60


def test_upsert_updates_existing(client, auth_headers):
    client.put("/profile/me", json={"profile": {"height": 172, "weight": 65}}, headers=auth_headers)
    res = client.put(
        "/profile/me",
        json={"profile": {"height": 172, "weight": 63, "gender": "female", "daily_calorie_goal": 1800}},
        headers=auth_headers,
    )
    profile = res.json()["profile"]
    assert profile["weight"] == 63
    assert profile["gender"] == "female"
    assert profile["daily_calorie_goal"] == 1800


def test_profile_without_weight_is_incomplete(client, auth_headers):
    res = client.put("/profile/me", json={"profile": {"height": 180}}, headers=auth_headers)
    assert res.json()["complete"] is False


def test_invalid_activity_level(client, auth_headers):
    res = client.put("/profile/me", json={"profile": {"activity_level": "couch"}}, headers=auth_headers)
    assert res.status_code == 422


def test_workout_days_range(client, auth_headers):
    res = client.put("/profile/me", json={"goal": {"weekly_workout_days": 8}}, headers=auth_headers)
    assert res.status_code == 422


def test_profile_requires_auth(client):
    assert client.get("/profile/me").status_code == 401


def test_partial_update_keeps_saved_fields(client, auth_headers):
    client.put(
        "/profile/me",
        json={"profile": {"height": 170, "weight": 70, "daily_calorie_goal": 1800},
              "goal": {"target_weight": 65, "weekly_workout_days": 5}},
        headers=auth_headers,
    )
    res = client.put("/profile/me", json={"profile": {"age": 30}, "goal": {"target_date": "2025-01-31"}},
                     headers=auth_headers)
    body = res.json()

    assert body["complete"] is True
    assert body["profile"]["height"] == 170
    assert body["profile"]["weight"] == 70
    assert body["profile"]["age"] == 30
    assert body["profile"]["daily_calorie_goal"] == 1800
    assert body["goal"]["target_weight"] == 65
    assert body["goal"]["weekly_workout_days"] == 5
    assert body["goal"]["target_date"] == "2025-01-31"


def test_explicit_null_clears_field(client, auth_headers):
    client.put("/profile/me", json={"profile": {"height": 170, "weight": 70, "age": 30}}, headers=auth_headers)
    res = client.put("/profile/me", json={"profile": {"age": None}}, headers=auth_headers)
    assert res.json()["profile"]["age"] is None
    assert res.json()["profile"]["height"] == 170
