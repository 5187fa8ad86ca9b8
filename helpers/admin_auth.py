import hmac
import json
from typing import Annotated, Optional
from fastapi import Depends, Header, Query, Request

from helpers.config import Settings
from helpers.dependencies import get_settings
from helpers.errors import Unauthorized


async def _body_admin_key(request: Request) -> Optional[str]:
    if request.method in ("GET", "HEAD", "DELETE"):
        return None
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if isinstance(body, dict):
        key = body.get("adminKey")
        return str(key) if key is not None else None
    return None


async def require_admin(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    x_admin_key: Annotated[Optional[str], Header(alias="x-admin-key")] = None,
    admin_key: Annotated[Optional[str], Query(alias="adminKey")] = None,
):
    """Shared-secret check for admin routes: header, then query, then JSON body."""
    key = x_admin_key or admin_key or await _body_admin_key(request)
    if not key or not hmac.compare_digest(key.encode(), settings.admin_key.encode()):
        raise Unauthorized("Admin key required")
