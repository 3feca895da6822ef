import enum
import os
import re
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.schema import CreateSchema

from app.config import Settings
from app.config import settings as default_settings
from app.db import Base
from app.db.database_config import DatabaseConfig, DatabaseProvider, resolve_database_config
from app.db.schema_generator import DATABASE_URL_ENV, write_schema
from app.errors import ConnectorStateError, DatabaseConnectionError
from app.utils.log import get_logger

log = get_logger("database")

_CREDENTIALS = re.compile(r"//.*@")
REDACTED_CREDENTIALS = "//***:***@"


def redact_url(url: str) -> str:
    """Mask everything between '//' and '@' so the URL can be logged or returned."""
    return _CREDENTIALS.sub(REDACTED_CREDENTIALS, url or "")


def _requested_mode(env_switch: Optional[str]) -> str:
    return (env_switch or "local").strip().lower() or "local"


class ConnectorState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONFIGURING = "configuring"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class DatabaseConnector:
    """
    Owns the resolved DatabaseConfig and the connection pool for one process.

    Lifecycle: uninitialized -> configuring (configure) -> connected (connect)
    -> disconnected (disconnect). A failed connect leaves the connector in
    configuring and raises; the process must not serve traffic in that case.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        config: Optional[DatabaseConfig] = None,
        schema_path: Optional[str] = None,
    ):
        self.settings = settings or default_settings
        self._config = config
        # DB_MODE as requested; an explicit config reports its own mode
        self.mode = config.mode if config is not None else _requested_mode(self.settings.DB_MODE)
        self.schema_path = schema_path or self.settings.SCHEMA_PATH
        self.state = ConnectorState.UNINITIALIZED
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def config(self) -> DatabaseConfig:
        if self._config is None:
            raise ConnectorStateError("Database connector has not been configured")
        return self._config

    def _require(self, *states: ConnectorState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise ConnectorStateError(
                f"Database connector is {self.state.value}, expected {allowed}"
            )

    # --- lifecycle ---

    def configure(self) -> DatabaseConfig:
        self._require(ConnectorState.UNINITIALIZED)
        self.state = ConnectorState.CONFIGURING
        if self._config is None:
            self._config = resolve_database_config(
                self.settings.DB_MODE, self.settings.DATABASE_URL_REMOTE
            )

        log.info("Configuring database...")
        log.info("Mode: %s", self.mode)
        log.info("Provider: %s", self._config.provider.value)
        log.info("URL: %s", redact_url(self._config.connection_url))

        # the driver side reads its URL from the environment
        os.environ[DATABASE_URL_ENV] = self._config.connection_url

        write_schema(
            self._config,
            self.schema_path,
            lock_timeout=self.settings.SCHEMA_LOCK_TIMEOUT_SECONDS,
        )
        log.info("Database configuration complete")
        return self._config

    def connect(self) -> None:
        self._require(ConnectorState.CONFIGURING)
        config = self.config
        url = os.environ.get(DATABASE_URL_ENV, config.connection_url)

        connect_args = {}
        execution_options = {}
        if config.provider is DatabaseProvider.LOCAL_FILE:
            # sessions are handed across the request threadpool
            connect_args["check_same_thread"] = False
        if config.namespace:
            execution_options["schema_translate_map"] = {None: config.namespace}

        try:
            engine = create_engine(
                url,
                future=True,
                echo=False,
                pool_pre_ping=True,
                connect_args=connect_args,
                execution_options=execution_options,
            )
        except Exception as e:
            raise DatabaseConnectionError(f"Invalid database URL {redact_url(url)}: {e}") from e

        try:
            import app.models.product  # noqa: F401  populate Base.metadata

            with engine.begin() as conn:
                conn.execute(text("SELECT 1"))
                if config.namespace:
                    conn.execute(CreateSchema(config.namespace, if_not_exists=True))
            Base.metadata.create_all(bind=engine)
        except Exception as e:
            engine.dispose()
            log.error("Could not connect to %s: %s", redact_url(url), e)
            raise DatabaseConnectionError(f"Could not connect to the database: {e}") from e

        self.engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self.state = ConnectorState.CONNECTED
        log.info("Database connection pool open")

    def disconnect(self) -> None:
        if self.state is ConnectorState.DISCONNECTED:
            return
        if self.engine is not None:
            self.engine.dispose()
            log.info("Database connection pool closed")
        self.engine = None
        self._session_factory = None
        self.state = ConnectorState.DISCONNECTED

    def start(self) -> None:
        self.configure()
        self.connect()

    def stop(self) -> None:
        self.disconnect()

    # --- sessions ---

    def session(self) -> Iterator[Session]:
        self._require(ConnectorState.CONNECTED)
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def ping(self) -> bool:
        if self.state is not ConnectorState.CONNECTED:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            log.warning("Database ping failed: %s", e)
            return False

    # --- read-only queries ---

    def is_local(self) -> bool:
        return self.config.provider is DatabaseProvider.LOCAL_FILE

    def is_remote(self) -> bool:
        return self.config.provider is DatabaseProvider.REMOTE_SQL

    def describe(self) -> dict:
        config = self.config
        return {
            "mode": self.mode,
            "provider": config.provider.value,
            "is_local": self.is_local(),
            "is_remote": self.is_remote(),
            "redacted_url": redact_url(config.connection_url),
            "namespaces": list(config.schema_namespaces),
        }
