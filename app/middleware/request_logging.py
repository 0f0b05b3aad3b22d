import time
import logging
from fastapi import Request

logger = logging.getLogger("access")


def _client_addr(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def request_logging_middleware(request: Request, call_next):
    start_time = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        # still leave an access line for requests that blew up
        logger.info(
            "",
            extra={
                "client_addr": _client_addr(request),
                "method": request.method,
                "path": request.url.path,
                "status_code": 500,
                "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        raise

    logger.info(
        "",
        extra={
            "client_addr": _client_addr(request),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
        },
    )

    return response
