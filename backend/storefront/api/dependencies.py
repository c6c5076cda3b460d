"""Request identity dependencies.

Authentication happens upstream; the identity provider forwards the
authenticated user id in ``X-User-ID`` and it is trusted as-is.
"""

from typing import Optional

from fastapi import Depends, Header

from storefront.config import get_settings
from storefront.errors import AdminRequired, AuthenticationRequired

settings = get_settings()


async def get_current_user_id(
    user_id: Optional[str] = Header(None, alias="X-User-ID"),
) -> str:
    if not user_id or not user_id.strip():
        raise AuthenticationRequired()
    return user_id.strip()


async def require_admin(user_id: str = Depends(get_current_user_id)) -> str:
    if user_id not in settings.admin_user_ids:
        raise AdminRequired()
    return user_id
