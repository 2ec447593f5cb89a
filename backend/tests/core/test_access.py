"""Access Guard — tests for the pure role predicate.

Tests cover:
    - has_role matches only the exact role
    - A missing caller role is never authorized
    - check_role raises AuthorizationError (401) carrying the caller id
"""

import pytest

from supportdesk.core.access import check_role, has_role
from supportdesk.core.domain_types import UserRole
from supportdesk.core.errors import AuthorizationError


def test_has_role_matches_exact_role():
    assert has_role("admin", UserRole.ADMIN)
    assert has_role("agent", UserRole.AGENT)


def test_has_role_rejects_other_roles():
    assert not has_role("agent", UserRole.ADMIN)
    assert not has_role("customer", UserRole.AGENT)
    assert not has_role("ADMIN", UserRole.ADMIN)


def test_has_role_rejects_missing_caller():
    assert not has_role(None, UserRole.ADMIN)


def test_check_role_passes_silently():
    assert check_role("agent", UserRole.AGENT) is None


def test_check_role_raises_with_context():
    with pytest.raises(AuthorizationError) as exc_info:
        check_role("customer", UserRole.ADMIN, user_id=9)
    err = exc_info.value
    assert err.http_status == 401
    assert err.message == "You are not authorized"
    assert err.context.user_id == 9
