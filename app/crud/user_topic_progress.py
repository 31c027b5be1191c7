from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user_topic_progress import UserTopicProgress


async def get_topic_progress(session: AsyncSession, user_id: int, topic_id: int) -> UserTopicProgress | None:
    """사용자/주제로 진도 조회"""
    result = await session.execute(
        select(UserTopicProgress).where(
            UserTopicProgress.user_id == user_id,
            UserTopicProgress.topic_id == topic_id,
        )
    )
    return result.scalar_one_or_none()


async def get_topic_progress_list(
    session: AsyncSession,
    user_id: int,
    topic_ids: list[int] | None = None,
) -> Sequence[UserTopicProgress]:
    stmt = select(UserTopicProgress).where(UserTopicProgress.user_id == user_id)
    if topic_ids is not None:
        stmt = stmt.where(UserTopicProgress.topic_id.in_(topic_ids))
    result = await session.execute(stmt.order_by(UserTopicProgress.topic_id))
    return result.scalars().all()


async def upsert_topic_progress(
    session: AsyncSession,
    user_id: int,
    topic_id: int,
    is_completed: bool,
    to_revise: bool,
    commit: bool = True,
) -> UserTopicProgress:
    """주제 진도 생성 또는 갱신"""
    progress = await get_topic_progress(session, user_id, topic_id)
    if progress is None:
        progress = UserTopicProgress(user_id=user_id, topic_id=topic_id)
        session.add(progress)
    progress.is_completed = is_completed
    progress.to_revise = to_revise
    if commit:
        await session.commit()
    else:
        await session.flush()
    return progress


async def delete_topic_progress(session: AsyncSession, progress_id: int) -> None:
    await session.execute(delete(UserTopicProgress).where(UserTopicProgress.id == progress_id))
    await session.commit()
