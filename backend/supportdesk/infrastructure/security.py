"""Security Primitives — password hashing (passlib/bcrypt) and access tokens (python-jose).

Invariants:
    - Passwords are stored only as bcrypt hashes
    - Access tokens are HS256 JWTs carrying sub (user id), username, role and exp
    - decode_access_token raises AuthenticationError for any invalid/expired token

Design Decisions:
    - The role claim is informational; api/dependencies.py re-reads the role from
      the User row so a demoted user loses access before the token expires
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from supportdesk.core.errors import AuthenticationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_COOKIE_NAME = "token"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: int,
    username: str,
    role: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
) -> str:
    """Sign an access token for the given user."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=15))
    payload = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str, secret_key: str, algorithm: str = "HS256",
) -> dict:
    """Verify signature and expiry; return claims with sub parsed to int."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        raise AuthenticationError("Could not validate credentials")
    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        raise AuthenticationError("Could not validate credentials")
    payload["sub"] = int(sub)
    return payload
