# apps/api_server/core/auth.py

import secrets
from typing import Optional
from fastapi import Depends, HTTPException, Request

from packages.quant_lib.config import settings


def get_optional_user(request: Request) -> Optional[str]:
    """
    Caller identity as forwarded by the auth gateway in front of this service.
    Identity is trusted as-is; tokens are verified upstream.
    """
    user_id = request.headers.get(settings.screener.user_header, "").strip()
    return user_id or None


def require_user(user_id: Optional[str] = Depends(get_optional_user)) -> str:
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id


def has_cron_secret(request: Request) -> bool:
    expected = settings.screener.cron_secret
    if not expected:
        return False
    supplied = request.headers.get("authorization", "")
    return secrets.compare_digest(supplied, f"Bearer {expected}")


def require_user_or_cron(
    request: Request, user_id: Optional[str] = Depends(get_optional_user)
) -> str:
    """Admin-style endpoints: any signed-in caller, or the scheduler's shared secret."""
    if user_id:
        return user_id
    if has_cron_secret(request):
        return "cron"
    raise HTTPException(status_code=401, detail="Unauthorized")
