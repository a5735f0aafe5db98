def test_health_check(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Healthy"


def test_unknown_route_has_message(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "message" in resp.json()


# -------- AUTH TESTS --------
def test_register_and_login(client, user_data):
    r = client.post("/api/users", json=user_data)
    assert r.status_code == 201

    # Login with correct credentials
    r2 = client.post("/api/login", data={
        "username": user_data["username"], "password": user_data["password"]
    })
    assert r2.status_code == 200
    assert r2.json()["token_type"] == "bearer"
    assert "access_token" in r2.json()

    # Login with incorrect password
    r3 = client.post("/api/login", data={
        "username": user_data["username"], "password": "wrongpassword"
    })
    assert r3.status_code == 401
    assert r3.json()["message"] == "Invalid credentials."

    # Login with nonexistent user
    r4 = client.post("/api/login", data={
        "username": "somebody", "password": "pw"
    })
    assert r4.status_code == 401


def test_refresh_issues_usable_token(client, auth_header):
    r = client.post("/api/refresh", headers=auth_header)
    assert r.status_code == 200
    token = r.json()["access_token"]
    r2 = client.get("/api/notes", headers={"Authorization": f"Bearer {token}"})
    assert r2.status_code == 200


def test_refresh_requires_auth(client):
    assert client.post("/api/refresh").status_code == 401


def test_endpoints_require_auth(client):
    for path in ("/api/notes", "/api/notes/1", "/api/folders", "/api/folders/1", "/api/tags", "/api/tags/1"):
        r = client.get(path)
        assert r.status_code == 401, path
        assert "message" in r.json()
    assert client.post("/api/notes", json={"title": "x"}).status_code == 401
    assert client.put("/api/notes/1", json={"title": "x"}).status_code == 401
    assert client.delete("/api/notes/1").status_code == 401
    assert client.post("/api/folders", json={"name": "x"}).status_code == 401
    assert client.post("/api/tags", json={"name": "x"}).status_code == 401


def test_garbage_token_rejected(client):
    r = client.get("/api/notes", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Bearer"
