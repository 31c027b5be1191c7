from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.models.base import utcnow
from app.models.user_question_progress import UserQuestionProgress


async def get_question_progress(
    session: AsyncSession,
    user_id: int,
    question_id: int,
) -> UserQuestionProgress | None:
    """사용자/문제로 진도 조회"""
    result = await session.execute(
        select(UserQuestionProgress).where(
            UserQuestionProgress.user_id == user_id,
            UserQuestionProgress.question_id == question_id,
        )
    )
    return result.scalar_one_or_none()


async def get_question_progress_list(
    session: AsyncSession,
    user_id: int,
    question_ids: list[int] | None = None,
) -> Sequence[UserQuestionProgress]:
    """사용자 문제 진도 목록 (최근 갱신순, 문제 함께 로드)"""
    stmt = (
        select(UserQuestionProgress)
        .where(UserQuestionProgress.user_id == user_id)
        .options(joinedload(UserQuestionProgress.question))
        .order_by(UserQuestionProgress.updated_at.desc(), UserQuestionProgress.id.desc())
    )
    if question_ids is not None:
        stmt = stmt.where(UserQuestionProgress.question_id.in_(question_ids))
    result = await session.execute(stmt)
    return result.scalars().all()


async def upsert_question_progress(
    session: AsyncSession,
    user_id: int,
    question_id: int,
    time_spent: int,
    is_completed: bool,
    to_revise: bool,
    remarks: str,
) -> UserQuestionProgress:
    """문제 진도 생성 또는 갱신 (attempted_at 갱신)"""
    progress = await get_question_progress(session, user_id, question_id)
    if progress is None:
        progress = UserQuestionProgress(user_id=user_id, question_id=question_id)
        session.add(progress)
    progress.time_spent = time_spent
    progress.is_completed = is_completed
    progress.to_revise = to_revise
    progress.remarks = remarks
    progress.attempted_at = utcnow()
    await session.commit()
    return progress


async def get_progress_flags(session: AsyncSession, user_id: int) -> list[tuple[int, bool, bool]]:
    """(문제 ID, 완료 여부, 복습 여부) 목록"""
    result = await session.execute(
        select(
            UserQuestionProgress.question_id,
            UserQuestionProgress.is_completed,
            UserQuestionProgress.to_revise,
        ).where(UserQuestionProgress.user_id == user_id)
    )
    return [tuple(row) for row in result.all()]
