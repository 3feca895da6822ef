from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from app.utils.log import get_logger

log = get_logger("database")


@contextmanager
def write_transaction(session: Session) -> Iterator[Session]:
    """
    Commit the work done inside the block, or roll it back and re-raise.
    Usage:
        with write_transaction(db):
            ... DB work ...
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        log.debug("write rolled back")
        raise
