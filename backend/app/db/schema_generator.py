import os

from filelock import FileLock, Timeout

from app.db.database_config import DatabaseConfig, DatabaseProvider
from app.errors import SchemaWriteError
from app.utils.log import get_logger

log = get_logger("database")

# name of the environment variable the datasource reads its URL from
DATABASE_URL_ENV = "DATABASE_URL"

LOCAL_PRICE_TYPE = "Float"
REMOTE_PRICE_TYPE = "Decimal  @db.Decimal(10, 2)"


def _price_type(config: DatabaseConfig) -> str:
    # SQLite has no native decimal type
    if config.provider is DatabaseProvider.LOCAL_FILE:
        return LOCAL_PRICE_TYPE
    return REMOTE_PRICE_TYPE


def generate_schema(config: DatabaseConfig) -> str:
    """
    Render the schema definition for `config`.

    The datasource URL is always referenced through env("DATABASE_URL"), never
    inlined, so the rendered file is safe to commit or log.
    """
    provider = config.provider.value
    datasource = [
        "datasource db {",
        f'  provider = "{provider}"',
        f'  url      = env("{DATABASE_URL_ENV}")',
    ]
    if config.schema_namespaces:
        names = ", ".join(f'"{s}"' for s in config.schema_namespaces)
        datasource.append(f"  schemas  = [{names}]")
    datasource.append("}")

    model = [
        "model Product {",
        "  id         String   @id @default(uuid())",
        "  name       String",
        f"  price      {_price_type(config)}",
        "  stock      Int",
        "  created_at DateTime @default(now())",
        "  updated_at DateTime @updatedAt",
    ]
    if config.schema_namespaces:
        model.append("")
        model.append(f'  @@schema("{config.schema_namespaces[0]}")')
    model.append("}")

    lines = [
        "// Generated at startup from DB_MODE; edits will be overwritten.",
        "generator client {",
        '  provider = "prisma-client-js"',
        "}",
        "",
        f"// {provider.upper()} datasource",
        *datasource,
        "",
        *model,
    ]
    return "\n".join(lines) + "\n"


def write_schema(config: DatabaseConfig, path: str, lock_timeout: float = 10) -> str:
    """
    Overwrite `path` with the schema for `config` and return the absolute path.
    Workers starting together serialize on a lock file beside the target.
    """
    target = os.path.abspath(path)
    os.makedirs(os.path.dirname(target), exist_ok=True)
    content = generate_schema(config)

    lock = FileLock(target + ".lock")
    try:
        with lock.acquire(timeout=lock_timeout):
            with open(target, "w", encoding="utf-8") as fh:
                fh.write(content)
    except Timeout:
        raise SchemaWriteError(f"Could not acquire schema lock for {target}")
    except OSError as e:
        raise SchemaWriteError(f"Could not write schema to {target}: {e}")

    log.info("Schema definition written to %s", target)
    return target
