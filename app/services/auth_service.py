import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token, hash_password, verify_password
from app.crud import user as user_crud
from app.exceptions import AuthenticationError, ConflictError, UserNotFoundError
from app.models.user import User
from app.schemas import user as user_schema

logger = logging.getLogger(__name__)


def _issue_token(user: User) -> str:
    payload = user_schema.TokenPayload(
        user_id=user.user_id,
        email=user.email,
        name=user.name,
        is_admin=user.is_admin,
    )
    return create_access_token(payload)


async def signup(session: AsyncSession, request: user_schema.SignupRequest) -> user_schema.AuthResponse:
    """회원가입

    Raises:
        ConflictError: 이미 가입된 이메일
    """
    if await user_crud.get_user_by_email(session, request.email):
        raise ConflictError("User with this email already exists")

    user = await user_crud.create_user(
        session,
        email=request.email,
        password_hash=hash_password(request.password),
        name=request.name,
    )
    logger.info(f"회원가입: user_id={user.user_id}")
    return user_schema.AuthResponse(
        message="User created successfully",
        user=user_schema.UserResponse.model_validate(user),
        token=_issue_token(user),
    )


async def signin(session: AsyncSession, request: user_schema.SigninRequest) -> user_schema.AuthResponse:
    """로그인 (실패 사유는 구분하지 않는다)"""
    user = await user_crud.get_user_by_email(session, request.email)
    if not user or not verify_password(request.password, user.password_hash):
        logger.info(f"로그인 실패: {request.email}")
        raise AuthenticationError("Invalid credentials")

    user = await user_crud.update_last_login(session, user)
    return user_schema.AuthResponse(
        message="Signed in successfully",
        user=user_schema.UserResponse.model_validate(user),
        token=_issue_token(user),
    )


async def get_profile(session: AsyncSession, user_id: str) -> user_schema.UserResponse:
    user = await user_crud.get_user_by_user_id(session, user_id)
    if not user:
        raise UserNotFoundError(user_id)
    return user_schema.UserResponse.model_validate(user)


async def update_profile(
    session: AsyncSession,
    user_id: str,
    request: user_schema.ProfileUpdateRequest,
) -> user_schema.UserResponse:
    """프로필 수정 (요청에 포함된 필드만 반영)"""
    user = await user_crud.get_user_by_user_id(session, user_id)
    if not user:
        raise UserNotFoundError(user_id)

    changes = request.model_dump(exclude_unset=True)
    user = await user_crud.update_profile(session, user, changes)
    return user_schema.UserResponse.model_validate(user)
