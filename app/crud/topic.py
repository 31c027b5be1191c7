from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.topic import Topic


async def get_topic_by_id(session: AsyncSession, topic_id: int) -> Topic | None:
    """ID로 주제 조회"""
    result = await session.execute(select(Topic).where(Topic.id == topic_id))
    return result.scalar_one_or_none()


async def get_topics(session: AsyncSession, module_id: int | None = None) -> Sequence[Topic]:
    """주제 목록 조회 (모듈 필터 선택)"""
    stmt = select(Topic)
    if module_id is not None:
        stmt = stmt.where(Topic.module_id == module_id)
    result = await session.execute(stmt.order_by(Topic.id))
    return result.scalars().all()


async def count_topics(session: AsyncSession) -> int:
    total = await session.scalar(select(func.count(Topic.id)))
    return total or 0


async def create_topics(session: AsyncSession, module_id: int, topics: list[dict]) -> list[Topic]:
    """모듈에 주제 일괄 추가"""
    new_topics = [Topic(module_id=module_id, **data) for data in topics]
    session.add_all(new_topics)
    await session.commit()
    return new_topics
