from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.module import Module


async def get_module_by_id(session: AsyncSession, module_id: int) -> Module | None:
    """ID로 모듈 조회"""
    result = await session.execute(select(Module).where(Module.id == module_id))
    return result.scalar_one_or_none()


async def get_module_by_name(session: AsyncSession, name: str, subject_id: int) -> Module | None:
    result = await session.execute(
        select(Module).where(Module.name == name, Module.subject_id == subject_id)
    )
    return result.scalar_one_or_none()


async def get_all_modules(session: AsyncSession) -> Sequence[Module]:
    result = await session.execute(select(Module).order_by(Module.id))
    return result.scalars().all()


async def create_module(session: AsyncSession, name: str, subject_id: int) -> Module:
    """모듈 생성"""
    module = Module(name=name, subject_id=subject_id)
    session.add(module)
    await session.commit()
    return module
