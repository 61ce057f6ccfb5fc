"""FastAPI dependency injection — principal, filter & services."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetadmin.config import settings
from assetadmin.database import get_db
from assetadmin.models.user import User
from assetadmin.services.asset_filter import AssetFilter, parse_filter
from assetadmin.services.asset_service import AssetQueryService
from assetadmin.services.permissions import ANONYMOUS, Principal

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_prefix}/auth/login",
    auto_error=False,
)


async def get_current_principal(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """Resolve the bearer token to a Principal; no token means anonymous."""
    if not token:
        return ANONYMOUS

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.token_algorithm],
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    username: str | None = payload.get("sub") or payload.get("username")
    if not username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: no subject claim",
        )

    result = await db.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )

    logger.debug("Authenticated %s", username)
    return Principal.from_user(user)


def get_asset_filter(request: Request) -> AssetFilter:
    """Allow-listed query parameters of the current request."""
    return parse_filter(request.query_params)


def get_asset_service() -> AssetQueryService:
    return AssetQueryService(root_can_view_type=settings.root_can_view_type)
