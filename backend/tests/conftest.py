import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.db.connector import DatabaseConnector
from app.db.database_config import DatabaseConfig, DatabaseProvider
from app.main import create_app


@pytest.fixture(autouse=True)
def _restore_database_url(monkeypatch):
    # connectors export DATABASE_URL; put the original value back after each test
    monkeypatch.setenv("DATABASE_URL", "unset")


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DB_MODE=None,
        DATABASE_URL_REMOTE=None,
        SCHEMA_PATH=str(tmp_path / "prisma" / "schema.prisma"),
        _env_file=None,
    )


@pytest.fixture
def local_config(tmp_path):
    return DatabaseConfig(
        provider=DatabaseProvider.LOCAL_FILE,
        connection_url=f"sqlite:///{tmp_path / 'test.db'}",
    )


@pytest.fixture
def connector(test_settings, local_config):
    c = DatabaseConnector(test_settings, config=local_config)
    yield c
    c.disconnect()


@pytest.fixture
def client(connector):
    with TestClient(create_app(connector)) as c:
        yield c


@pytest.fixture
def db(connector):
    connector.start()
    gen = connector.session()
    session = next(gen)
    yield session
    gen.close()
