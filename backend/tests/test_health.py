def test_root_greeting(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == "Hello World!"


def test_health_ok(client):
    res = client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert "timestamp" in body
    assert body["database"]["provider"] == "sqlite"
    assert body["database"]["is_local"] is True


def test_database_info(client):
    res = client.get("/database-info")
    assert res.status_code == 200
    body = res.json()
    assert body["message"]
    assert "timestamp" in body
    assert set(body["data"]) == {
        "mode",
        "provider",
        "is_local",
        "is_remote",
        "redacted_url",
        "namespaces",
    }
    assert body["data"]["mode"] == "local"
