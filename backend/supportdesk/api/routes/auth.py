"""Auth Routes — register, login, logout and OTP verification.

Invariants:
    - Login and register set the `token` cookie (httpOnly, SameSite=lax)
    - verify-otp and resend-otp require an authenticated caller of any role
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.api.dependencies import get_current_user
from supportdesk.api.responses import api_response
from supportdesk.config import Settings, get_settings
from supportdesk.infrastructure.database import get_db
from supportdesk.infrastructure.mailer import BrevoMailer, get_mailer
from supportdesk.infrastructure.security import TOKEN_COOKIE_NAME
from supportdesk.models.user import User
from supportdesk.schemas.auth import (
    LoginRequest, RegisterRequest, UserView, VerifyOtpRequest,
)
from supportdesk.services.accounts import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def get_account_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer: BrevoMailer = Depends(get_mailer),
) -> AccountService:
    return AccountService(db, settings, mailer)


def _set_token_cookie(response: JSONResponse, token: str, settings: Settings) -> None:
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    """Create an account and email a verification code."""
    user = await service.register(body)
    response = api_response(
        status.HTTP_201_CREATED, UserView.model_validate(user),
        "User created successfully",
    )
    _set_token_cookie(response, service.issue_token(user), settings)
    return response


@router.post("/login")
async def login(
    body: LoginRequest,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    user = await service.authenticate(body.email, body.password)
    token = service.issue_token(user)
    response = api_response(
        status.HTTP_200_OK,
        {"user": UserView.model_validate(user).model_dump(by_alias=True, mode="json"),
         "accessToken": token},
        "User logged in successfully",
    )
    _set_token_cookie(response, token, settings)
    return response


@router.post("/logout")
async def logout():
    response = api_response(status.HTTP_200_OK, None, "User logged out successfully")
    response.delete_cookie(TOKEN_COOKIE_NAME)
    return response


@router.post("/verify-otp")
async def verify_otp(
    body: VerifyOtpRequest,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    verified = await service.verify_otp(user, body.otp)
    return api_response(
        status.HTTP_200_OK, UserView.model_validate(verified),
        "User verified successfully",
    )


@router.post("/resend-otp")
async def resend_otp(
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    await service.resend_otp(user)
    return api_response(
        status.HTTP_200_OK, None, "OTP has been resent to your email",
    )
