# apps/api_server/core/limiter.py

from slowapi import Limiter
from fastapi import Request

from packages.quant_lib.config import settings


def get_rate_limit_key(request: Request) -> str:
    # 1. Signed-in callers are limited per user, wherever they connect from
    user_id = request.headers.get(settings.screener.user_header)
    if user_id:
        return f"user:{user_id}"

    # 2. Cloudflare tunnel, then a standard proxy
    if request.headers.get("cf-connecting-ip"):
        return request.headers["cf-connecting-ip"]
    if request.headers.get("x-forwarded-for"):
        return request.headers["x-forwarded-for"].split(",")[0].strip()

    # 3. Direct connection (localhost dev, test client)
    return request.client.host if request.client else "127.0.0.1"


# Shared by every router; main.py attaches it to app.state
limiter = Limiter(key_func=get_rate_limit_key, enabled=settings.system.rate_limit_enabled)
