from sqlalchemy.orm import declarative_base

Base = declarative_base()

from app.db.database_config import (  # noqa: E402
    DatabaseConfig,
    DatabaseProvider,
    resolve_database_config,
)
from app.db.schema_generator import generate_schema, write_schema  # noqa: E402

__all__ = [
    "Base",
    "DatabaseConfig",
    "DatabaseProvider",
    "resolve_database_config",
    "generate_schema",
    "write_schema",
]
