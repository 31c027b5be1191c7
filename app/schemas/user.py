from datetime import datetime

from pydantic import EmailStr, Field

from app.models.user import SubscriptionStatus
from app.schemas.common import CamelModel


class SignupRequest(CamelModel):
    """회원가입 요청 스키마"""
    name: str | None = Field(None, max_length=200)
    email: EmailStr
    # bcrypt 입력 한도 72바이트
    password: str = Field(..., min_length=6, max_length=72)


class SigninRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class ProfileUpdateRequest(CamelModel):
    name: str | None = Field(None, max_length=200)
    mobile_number: str | None = Field(None, max_length=20)
    profile_picture_url: str | None = Field(None, alias="profilePictureURL")


class UserResponse(CamelModel):
    user_id: str
    name: str | None
    email: str
    subscription_status: SubscriptionStatus
    is_admin: bool
    profile_picture_url: str | None = Field(None, alias="profilePictureURL")
    mobile_number: str | None = None
    last_login: datetime | None = None


class AuthResponse(CamelModel):
    message: str
    user: UserResponse
    token: str


class TokenPayload(CamelModel):
    """JWT 본문 (userId, email, name, isAdmin)"""
    user_id: str
    email: str
    name: str | None = None
    is_admin: bool = False
