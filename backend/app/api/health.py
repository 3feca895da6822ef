from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.deps import get_connector
from app.db.connector import DatabaseConnector

router = APIRouter()

GREETING = "Hello World!"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/", tags=["health"])
def root():
    return GREETING


@router.get("/database-info", tags=["health"])
def database_info(connector: DatabaseConnector = Depends(get_connector)):
    return {
        "message": "Database information",
        "data": connector.describe(),
        "timestamp": _now(),
    }


@router.get("/health", tags=["health"])
def health(connector: DatabaseConnector = Depends(get_connector)):
    return {
        "status": "healthy" if connector.ping() else "degraded",
        "timestamp": _now(),
        "database": connector.describe(),
    }
