from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.models.base import get_db
from app.schemas import user as user_schema
from app.services import auth_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", response_model=user_schema.AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: user_schema.SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """회원가입 API"""
    return await auth_service.signup(db, request)


@router.post("/signin", response_model=user_schema.AuthResponse)
async def signin(
    request: user_schema.SigninRequest,
    db: AsyncSession = Depends(get_db),
):
    """로그인 API"""
    return await auth_service.signin(db, request)


@router.get("/profile", response_model=user_schema.UserResponse)
async def get_profile(
    current_user: user_schema.TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.get_profile(db, current_user.user_id)


@router.put("/profile", response_model=user_schema.UserResponse)
async def update_profile(
    request: user_schema.ProfileUpdateRequest,
    current_user: user_schema.TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """프로필 수정 API"""
    return await auth_service.update_profile(db, current_user.user_id, request)
