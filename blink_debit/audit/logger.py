"""
Request trace logging.

Each attempt of an API call gets one log line with:
  - request-id (the correlation ID shared by every retry of the call)
  - method and path
  - outcome (HTTP status, or the transport error)

Bearer tokens and request bodies are never logged.
"""

import logging
from typing import Optional

from blink_debit.config import settings

logger = logging.getLogger("blink_debit.audit")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the client's log format at the configured level."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


def log_exchange(
    method: str,
    path: str,
    request_id: str,
    status_code: Optional[int] = None,
    error: Optional[str] = None,
) -> None:
    if error is not None:
        logger.warning("CALL | request-id=%s %s %s -> error: %s", request_id, method, path, error)
    elif status_code is not None and status_code >= 400:
        logger.warning("CALL | request-id=%s %s %s -> %d", request_id, method, path, status_code)
    else:
        logger.info("CALL | request-id=%s %s %s -> %s", request_id, method, path, status_code)
