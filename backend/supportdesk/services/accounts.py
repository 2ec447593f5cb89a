"""Account Service — registration, login and OTP verification.

Invariants:
    - User, Agent profile (role agent) and UserOTP are written in one transaction
    - Admin accounts cannot be self-registered
    - Login rejects an unknown email or a wrong password with 400
    - A verified OTP row is deleted; a failed attempt increments attempts
    - OTP email is sent only after the rows are committed

Design Decisions:
    - Mailer injected per call: tests swap in a recording fake
"""

import logging
from datetime import timedelta

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.config import Settings
from supportdesk.core.domain_types import UserRole
from supportdesk.core.errors import (
    ErrorContext, RequestValidationFailed,
)
from supportdesk.core.otp import OtpVerdict, evaluate_otp, generate_otp, otp_expiry
from supportdesk.infrastructure.mailer import BrevoMailer
from supportdesk.infrastructure.security import (
    create_access_token, hash_password, verify_password,
)
from supportdesk.models.agent import Agent
from supportdesk.models.user import User
from supportdesk.models.user_otp import UserOTP
from supportdesk.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)

_OTP_REJECTIONS = {
    OtpVerdict.MISSING: "No active verification code",
    OtpVerdict.EXPIRED: "No active verification code",
    OtpVerdict.TOO_MANY_ATTEMPTS: "Too many attempts, request a new code",
    OtpVerdict.MISMATCH: "Invalid OTP",
}


class AccountService:
    def __init__(self, db: AsyncSession, settings: Settings, mailer: BrevoMailer):
        self.db = db
        self.settings = settings
        self.mailer = mailer

    def issue_token(self, user: User) -> str:
        return create_access_token(
            user.id, user.username, user.role,
            secret_key=self.settings.jwt_secret_key,
            algorithm=self.settings.jwt_algorithm,
            expires_delta=timedelta(minutes=self.settings.access_token_expire_minutes),
        )

    async def register(self, body: RegisterRequest) -> User:
        if body.role == UserRole.ADMIN.value:
            raise RequestValidationFailed("Admin accounts cannot be self-registered")

        existing = await self.db.execute(
            select(User.email, User.username).where(
                or_(User.email == body.email, User.username == body.username),
            )
        )
        for email, _ in existing.all():
            if email == body.email:
                raise RequestValidationFailed("This email is already registered")
            raise RequestValidationFailed("This username is already taken")

        user = User(
            firstname=body.first_name,
            lastname=body.last_name,
            email=body.email,
            phone_number=body.phone_number,
            password=hash_password(body.password),
            username=body.username,
            gender=body.gender,
            country=body.country,
            role=body.role,
        )
        otp = generate_otp(self.settings.otp_length)
        try:
            self.db.add(user)
            await self.db.flush()
            if body.role == UserRole.AGENT.value:
                self.db.add(Agent(user_id=user.id))
            self.db.add(UserOTP(
                user_id=user.id,
                otp=otp,
                expires_at=otp_expiry(self.settings.otp_expire_minutes),
                attempts=0,
            ))
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Registration rejected by constraint: {e}")
            raise RequestValidationFailed("This email is already registered")

        await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id, "role": user.role})
        await self.mailer.send_verification_code(user.email, otp)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if not user:
            raise RequestValidationFailed("This email is not registered")
        if not verify_password(password, user.password):
            raise RequestValidationFailed("Your password is not correct")
        logger.info("User logged in", extra={"user_id": user.id})
        return user

    async def verify_otp(self, user: User, submitted: str) -> User:
        record = await self._get_otp(user.id)
        verdict = evaluate_otp(
            record.otp if record else None,
            record.expires_at if record else None,
            record.attempts if record else 0,
            submitted,
            self.settings.otp_max_attempts,
        )
        ctx = ErrorContext(user_id=user.id)

        if verdict == OtpVerdict.MISMATCH:
            record.attempts += 1
            await self.db.commit()
        if verdict != OtpVerdict.VALID:
            logger.info(f"OTP rejected: {verdict.value}", extra={"user_id": user.id})
            raise RequestValidationFailed(_OTP_REJECTIONS[verdict], context=ctx)

        user.is_verified = True
        await self.db.delete(record)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("User verified", extra={"user_id": user.id})
        return user

    async def resend_otp(self, user: User) -> None:
        otp = generate_otp(self.settings.otp_length)
        expires_at = otp_expiry(self.settings.otp_resend_expire_minutes)
        record = await self._get_otp(user.id)
        if record is None:
            self.db.add(UserOTP(
                user_id=user.id, otp=otp, expires_at=expires_at, attempts=0,
            ))
        else:
            record.otp = otp
            record.expires_at = expires_at
            record.attempts = 0
        await self.db.commit()

        await self.mailer.send_verification_code(user.email, otp)
        logger.info("OTP reissued", extra={"user_id": user.id})

    async def _get_otp(self, user_id: int) -> UserOTP | None:
        result = await self.db.execute(
            select(UserOTP).where(UserOTP.user_id == user_id),
        )
        return result.scalar_one_or_none()
