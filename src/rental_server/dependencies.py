"""FastAPI dependency injection — DB sessions, repositories, upload issuer, caller identity.

Each request that touches the database gets a fresh ``AsyncSession`` via
``get_db()``, committed on success and rolled back on error; repositories
only ``flush()``.

Caller identity comes from headers injected by the authenticating proxy:
``X-User-ID`` and ``X-User-Role``.  Client-portal endpoints need neither.
"""

import hmac
import logging
from typing import AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rental_db.engine import transaction
from rental_db.models.enums import MANAGER_ROLES, STAFF_ROLES, UserRole
from rental_db.repository import QuestionRepository, ResponseRepository

from rental_server.storage import UploadTargetIssuer

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Database session: transaction boundary lives here
# ------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session; commit on success, rollback on error."""
    async with transaction() as session:
        yield session


# ------------------------------------------------------------------
# Singletons stashed on app.state during lifespan
# ------------------------------------------------------------------

def get_question_repository(request: Request) -> QuestionRepository:
    return request.app.state.question_repo


def get_response_repository(request: Request) -> ResponseRepository:
    return request.app.state.response_repo


def get_upload_issuer(request: Request) -> UploadTargetIssuer:
    return request.app.state.upload_issuer


# ------------------------------------------------------------------
# Caller identity
# ------------------------------------------------------------------

async def get_user_id(
    request: Request,
    x_user_id: str | None = Header(None, alias="X-User-ID"),
    x_proxy_secret: str | None = Header(None, alias="X-Proxy-Secret"),
) -> str:
    """Extract user identity from the ``X-User-ID`` header.

    Returns 401 if the header is missing.  When ``TRUSTED_PROXY_SECRET`` is
    configured the request must also carry a matching ``X-Proxy-Secret``
    (403 otherwise).
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="X-User-ID header is required")

    expected_secret: str | None = request.app.state.settings.trusted_proxy_secret
    if expected_secret:
        if not x_proxy_secret:
            raise HTTPException(status_code=403, detail="X-Proxy-Secret header is required")
        # Constant-time comparison
        if not hmac.compare_digest(x_proxy_secret, expected_secret):
            raise HTTPException(status_code=403, detail="Invalid proxy secret")

    return x_user_id


async def get_user_role(
    x_user_role: str | None = Header(None, alias="X-User-Role"),
) -> UserRole | None:
    """Parse ``X-User-Role``; unknown or missing roles yield ``None``."""
    if not x_user_role:
        return None
    try:
        return UserRole(x_user_role)
    except ValueError:
        logger.warning("Unknown role in X-User-Role: %r", x_user_role)
        return None


async def require_staff(
    user_id: str = Depends(get_user_id),
    role: UserRole | None = Depends(get_user_role),
) -> str:
    """Caller must hold any staff role; returns the user id."""
    if role not in STAFF_ROLES:
        raise HTTPException(status_code=403, detail="Staff role required")
    return user_id


async def require_manager(
    user_id: str = Depends(get_user_id),
    role: UserRole | None = Depends(get_user_role),
) -> str:
    """Caller must hold a manager or admin role; returns the user id."""
    if role not in MANAGER_ROLES:
        raise HTTPException(
            status_code=403, detail="Access denied. Manager or admin role required.",
        )
    return user_id
