"""Request Dependencies — caller resolution and the role-gated Access Guard.

Invariants:
    - Token read from the `token` cookie first, then an `Authorization: Bearer` header
    - The caller's role is read from the User row, not trusted from the token claim
    - require_role(...) dependencies run before body field validation, so a wrong
      role is reported even when a well-formed JSON body has missing or invalid
      fields; a body that is not parseable JSON is rejected with 400 first

Design Decisions:
    - require_role is a dependency factory: one predicate, parameterized per endpoint
"""

import logging

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.config import Settings, get_settings
from supportdesk.core.access import check_role
from supportdesk.core.domain_types import UserRole
from supportdesk.core.errors import AuthenticationError
from supportdesk.infrastructure.database import get_db
from supportdesk.infrastructure.security import TOKEN_COOKIE_NAME, decode_access_token
from supportdesk.models.user import User

logger = logging.getLogger(__name__)


def extract_token(request: Request) -> str | None:
    token = request.cookies.get(TOKEN_COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the authenticated caller or raise AuthenticationError (401)."""
    token = extract_token(request)
    if not token:
        raise AuthenticationError()
    claims = decode_access_token(
        token, settings.jwt_secret_key, settings.jwt_algorithm,
    )
    result = await db.execute(select(User).where(User.id == claims["sub"]))
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning(f"Token for unknown user {claims['sub']}")
        raise AuthenticationError("Could not validate credentials")
    return user


def require_role(role: UserRole):
    """Build a dependency that admits only callers holding `role`."""

    async def guard(user: User = Depends(get_current_user)) -> User:
        check_role(user.role, role, user_id=user.id)
        return user

    guard.__name__ = f"require_{role.value}"
    return guard


require_admin = require_role(UserRole.ADMIN)
require_agent = require_role(UserRole.AGENT)
