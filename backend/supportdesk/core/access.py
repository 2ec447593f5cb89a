"""Access Guard — pure role predicate shared by every role-gated endpoint.

Invariants:
    - check_role is PURE: no IO, raises AuthorizationError or returns None
    - A missing caller is never authorized

Design Decisions:
    - One predicate parameterized by required role instead of a per-handler check;
      the FastAPI dependency in api/dependencies.py wraps it per request
"""

from supportdesk.core.domain_types import UserRole
from supportdesk.core.errors import AuthorizationError, ErrorContext


def has_role(caller_role: str | None, required: UserRole) -> bool:
    """True when the caller's role equals the required role."""
    if caller_role is None:
        return False
    return caller_role == required.value


def check_role(
    caller_role: str | None, required: UserRole, user_id: int | None = None,
) -> None:
    """Raise AuthorizationError unless the caller holds the required role."""
    if not has_role(caller_role, required):
        raise AuthorizationError(context=ErrorContext(user_id=user_id))
