import pytest
from fastapi.testclient import TestClient

from app.db.connector import DatabaseConnector
from app.db.database_config import DatabaseConfig, DatabaseProvider
from app.errors import DatabaseConnectionError
from app.main import create_app
from app.repositories.product_repo import ProductRepository

ERROR_KEYS = {"status_code", "timestamp", "path", "method", "message"}


def test_unknown_route_uses_error_shape(client):
    res = client.get("/nowhere")
    assert res.status_code == 404
    body = res.json()
    assert set(body) == ERROR_KEYS
    assert body["path"] == "/nowhere"


def test_method_not_allowed_uses_error_shape(client):
    res = client.patch("/products")
    assert res.status_code == 405
    assert res.json()["status_code"] == 405


def test_unhandled_error_is_generic_500(connector, monkeypatch):
    def boom(self):
        raise RuntimeError("driver exploded with secret details")

    monkeypatch.setattr(ProductRepository, "list", boom)
    with TestClient(create_app(connector), raise_server_exceptions=False) as c:
        res = c.get("/products")
    assert res.status_code == 500
    body = res.json()
    assert set(body) == ERROR_KEYS
    assert body["message"] == "Internal server error"
    assert body["method"] == "GET"


def test_startup_aborts_without_database(test_settings, tmp_path):
    cfg = DatabaseConfig(
        provider=DatabaseProvider.LOCAL_FILE,
        connection_url=f"sqlite:///{tmp_path / 'missing' / 'x.db'}",
    )
    app = create_app(DatabaseConnector(test_settings, config=cfg))
    with pytest.raises(DatabaseConnectionError):
        with TestClient(app):
            pass


def test_error_path_keeps_query_string(client):
    res = client.get("/products/nope?x=1")
    assert res.status_code == 404
    assert res.json()["path"] == "/products/nope?x=1"
