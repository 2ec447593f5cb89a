"""Auth Schemas — registration, login and OTP verification bodies.

Invariants:
    - email validated by pydantic EmailStr
    - role and gender accepted in any case, stored lowercase
    - UserView never exposes the password hash
"""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, field_validator

from supportdesk.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone_number: str = Field(min_length=5, max_length=30)
    password: str = Field(min_length=8, max_length=72)
    username: str = Field(min_length=3, max_length=50)
    gender: Literal["male", "female", "other"]
    country: str = Field(min_length=1, max_length=100)
    role: Literal["admin", "agent", "customer"] = "customer"

    @field_validator("gender", "role", mode="before")
    @classmethod
    def lowercase(cls, v):
        return v.lower() if isinstance(v, str) else v


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class VerifyOtpRequest(CamelModel):
    otp: str = Field(min_length=1, max_length=10)


class UserView(CamelModel):
    id: int
    email: str
    username: str
    firstname: str
    lastname: str
    phone_number: str | None = None
    gender: str | None = None
    country: str | None = None
    role: str
    is_verified: bool
    created_at: datetime
