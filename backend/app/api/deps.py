from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from app.db.connector import DatabaseConnector


def get_connector(request: Request) -> DatabaseConnector:
    return request.app.state.connector


def get_db(request: Request) -> Iterator[Session]:
    yield from get_connector(request).session()
