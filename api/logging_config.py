"""
Logging for the API.

Every record written through the `api` logger (and its children such as
api.shows or api.admin) is tagged with the id of the request being served.
"""

import logging
import os
import re
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Ids supplied by callers are echoed into logs and headers, so keep them tame
_INCOMING_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"


class RequestIdFilter(logging.Filter):
    """Stamp records with the current request id ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.getenv("LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_api_logger(
    name: str = "api",
    log_dir: Optional[Path] = None,
    level: Optional[int] = None,
) -> logging.Logger:
    """
    Configure the API logger once per process.

    Records go to a dated file under LOG_DIR and to stdout. The level comes
    from LOG_LEVEL when not given.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = _level_from_env() if level is None else level
    logger.setLevel(level)

    log_dir = log_dir or Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs")))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d')}.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    request_filter = RequestIdFilter()
    for handler in (logging.FileHandler(log_file), logging.StreamHandler(sys.stdout)):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(request_filter)
        logger.addHandler(handler)

    return logger


def generate_request_id(incoming: Optional[str] = None) -> str:
    """Reuse a well-formed X-Request-ID from the caller, else make a short one."""
    if incoming and _INCOMING_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex[:8]


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


logger = setup_api_logger()
