# apps/api_server/core/utils.py

import time
from fastapi import Request


def mark_request_start(request: Request) -> None:
    request.state.started_at = time.perf_counter()


def elapsed_ms(request: Request) -> int:
    """Milliseconds since the timing middleware saw the request (0 if it never did)."""
    started_at = getattr(request.state, "started_at", None)
    if started_at is None:
        return 0
    return int((time.perf_counter() - started_at) * 1000)
