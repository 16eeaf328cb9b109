def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_id_is_echoed(client):
    assert client.get("/health", headers={"X-Request-ID": "req-123"}).headers["X-Request-ID"] == "req-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_validation_errors_are_readable(client):
    response = client.post("/api/auth/login", json={"username": "alice"})
    assert response.status_code == 400
    assert response.json()["detail"].startswith("password:")
