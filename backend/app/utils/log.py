import logging
import sys

from app.config import settings


def get_logger(name: str, level: str = None) -> logging.Logger:
    """
    Return the named component logger, attaching a stdout handler the first time.
    Records are prefixed with the upper-cased component name, e.g. "[DATABASE] ...".
    """
    log = logging.getLogger(name)
    log.setLevel((level or settings.LOG_LEVEL).upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(f"[{name.upper()}] %(message)s"))
        log.addHandler(h)
    return log
