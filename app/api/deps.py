"""인증 의존성"""
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import decode_access_token
from app.crud import user as user_crud
from app.exceptions import AuthenticationError, PermissionDeniedError, UserNotFoundError
from app.models.base import get_db
from app.models.user import User
from app.schemas.user import TokenPayload

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenPayload:
    """Bearer 토큰 해석 (DB 조회 없음)"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")
    return payload


async def get_current_db_user(
    payload: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> User:
    """토큰 사용자를 DB에서 다시 조회"""
    user = await user_crud.get_user_by_user_id(db, payload.user_id)
    if not user:
        raise UserNotFoundError(payload.user_id)
    return user


async def require_admin(user: User = Depends(get_current_db_user)) -> User:
    """관리자 전용 라우트 (토큰의 isAdmin이 아니라 저장된 값으로 판단)"""
    if not user.is_admin:
        logger.warning(f"관리자 권한 없음: user_id={user.user_id}")
        raise PermissionDeniedError()
    return user
