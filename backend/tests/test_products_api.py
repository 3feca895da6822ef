def _create(client, **overrides):
    payload = {"name": "Widget", "price": 10.5, "stock": 3}
    payload.update(overrides)
    return client.post("/products", json=payload)


def test_create_get_delete_flow(client):
    res = _create(client)
    assert res.status_code == 201
    created = res.json()
    assert created["id"]
    assert created["name"] == "Widget"
    assert created["price"] == 10.5
    assert created["stock"] == 3
    assert "created_at" in created and "updated_at" in created

    res = client.get(f"/products/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created

    res = client.delete(f"/products/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {"deleted": True}

    path = f"/products/{created['id']}"
    res = client.get(path)
    assert res.status_code == 404
    body = res.json()
    assert body["status_code"] == 404
    assert body["message"]
    assert body["path"] == path
    assert body["method"] == "GET"
    assert "timestamp" in body


def test_list_products(client):
    _create(client, name="A")
    _create(client, name="B")
    res = client.get("/products")
    assert res.status_code == 200
    body = res.json()
    assert isinstance(body, list)
    assert sorted(p["name"] for p in body) == ["A", "B"]


def test_partial_update(client):
    created = _create(client).json()
    res = client.put(f"/products/{created['id']}", json={"price": 15})
    assert res.status_code == 200
    updated = res.json()
    assert updated["price"] == 15
    assert updated["name"] == created["name"]
    assert updated["stock"] == created["stock"]
    assert updated["created_at"] == created["created_at"]


def test_update_unknown_id_is_404(client):
    res = client.put("/products/nope", json={"price": 15})
    assert res.status_code == 404
    assert res.json()["method"] == "PUT"


def test_delete_unknown_id_is_404(client):
    res = client.delete("/products/nope")
    assert res.status_code == 404
    assert res.json()["path"] == "/products/nope"


def test_create_validation_error_shape(client):
    res = _create(client, price=-1)
    assert res.status_code == 400
    body = res.json()
    assert body["status_code"] == 400
    assert body["method"] == "POST"
    assert body["path"] == "/products"
    assert "price" in body["message"]


def test_create_rejects_unknown_fields(client):
    res = _create(client, color="red")
    assert res.status_code == 400
    assert "color" in res.json()["message"]


def test_update_validation_error(client):
    created = _create(client).json()
    res = client.put(f"/products/{created['id']}", json={"stock": -1})
    assert res.status_code == 400
    # product untouched
    assert client.get(f"/products/{created['id']}").json()["stock"] == 3


def test_malformed_json_is_400(client):
    res = client.post(
        "/products", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert res.status_code == 400
    assert res.json()["path"] == "/products"


def test_missing_body_is_400(client):
    res = client.post("/products")
    assert res.status_code == 400


def test_oversized_stock_is_400(client):
    res = _create(client, stock=10**30)
    assert res.status_code == 400
    assert "stock" in res.json()["message"]

    created = _create(client).json()
    res = client.put(f"/products/{created['id']}", json={"stock": 2**40})
    assert res.status_code == 400


def test_timestamps_carry_utc_offset(client):
    created = _create(client).json()
    assert created["created_at"].endswith(("Z", "+00:00"))
    assert created["updated_at"].endswith(("Z", "+00:00"))
    fetched = client.get(f"/products/{created['id']}").json()
    assert fetched["created_at"] == created["created_at"]
