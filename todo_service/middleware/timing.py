import logging
import time

from fastapi import Request

logger = logging.getLogger(__name__)


async def log_request_duration(request: Request, call_next):
    """
    Logs how long every inbound call took.

    Observational only: the handler's response (or exception) is passed
    through unchanged.
    """
    start = time.perf_counter()
    try:
        return await call_next(request)
    finally:
        duration = time.perf_counter() - start
        logger.info(
            "request duration %.6fs %s %s", duration, request.method, request.url.path
        )
