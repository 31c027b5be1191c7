from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import utcnow
from app.models.user import User


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """이메일로 사용자 조회 (소문자 기준)"""
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_user_id(session: AsyncSession, user_id: str) -> User | None:
    result = await session.execute(select(User).where(User.user_id == user_id))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    email: str,
    password_hash: str,
    name: str | None = None,
    is_admin: bool = False,
) -> User:
    """사용자 생성"""
    user = User(email=email.lower(), password_hash=password_hash, name=name, is_admin=is_admin)
    session.add(user)
    await session.commit()
    return user


async def update_last_login(session: AsyncSession, user: User) -> User:
    user.last_login = utcnow()
    await session.commit()
    return user


async def update_profile(session: AsyncSession, user: User, changes: dict) -> User:
    """프로필 수정 (전달된 필드만)"""
    for field, value in changes.items():
        setattr(user, field, value)
    await session.commit()
    return user
