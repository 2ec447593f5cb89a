"""OTP Rules — generation and verification decisions for account verification codes.

Invariants:
    - generate_otp returns exactly `length` decimal digits (leading zeros allowed)
    - evaluate_otp is PURE: returns a verdict, the shell applies the DB mutation
    - An expired code is treated as absent

Design Decisions:
    - secrets over random: codes gate account verification
    - Attempt cap checked before comparison so a correct guess after the cap still fails
"""

import secrets
from datetime import datetime, timedelta, timezone
from enum import Enum


class OtpVerdict(str, Enum):
    VALID = "valid"
    MISSING = "missing"
    EXPIRED = "expired"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    MISMATCH = "mismatch"


def generate_otp(length: int = 4) -> str:
    if length < 1:
        raise ValueError("OTP length must be positive")
    return "".join(secrets.choice("0123456789") for _ in range(length))


def otp_expiry(minutes: int, now: datetime | None = None) -> datetime:
    """Expiry timestamp `minutes` from now (UTC)."""
    return (now or datetime.now(timezone.utc)) + timedelta(minutes=minutes)


def evaluate_otp(
    stored_code: str | None,
    expires_at: datetime | None,
    attempts: int,
    submitted: str,
    max_attempts: int,
    now: datetime | None = None,
) -> OtpVerdict:
    if stored_code is None or expires_at is None:
        return OtpVerdict.MISSING
    now = now or datetime.now(timezone.utc)
    # SQLite hands back naive datetimes; stored values are always UTC
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if expires_at <= now:
        return OtpVerdict.EXPIRED
    if attempts >= max_attempts:
        return OtpVerdict.TOO_MANY_ATTEMPTS
    if not secrets.compare_digest(stored_code.encode(), submitted.encode()):
        return OtpVerdict.MISMATCH
    return OtpVerdict.VALID
