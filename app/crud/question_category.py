from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.models.question import Question
from app.models.question_category import QuestionCategory
from app.models.sub_category import sub_category_question_categories
from app.models.subject import Subject


async def get_question_category_by_id(session: AsyncSession, category_id: int) -> QuestionCategory | None:
    """ID로 문제 분류 조회"""
    result = await session.execute(select(QuestionCategory).where(QuestionCategory.id == category_id))
    return result.scalar_one_or_none()


async def get_question_category_by_name(session: AsyncSession, name: str) -> QuestionCategory | None:
    result = await session.execute(
        select(QuestionCategory).where(func.lower(QuestionCategory.name) == name.lower())
    )
    return result.scalar_one_or_none()


async def get_question_categories_by_names(
    session: AsyncSession,
    names: list[str],
) -> Sequence[QuestionCategory]:
    """이름 목록으로 분류 일괄 조회 (과목 함께 로드)"""
    if not names:
        return []
    result = await session.execute(
        select(QuestionCategory)
        .where(QuestionCategory.name.in_(names))
        .options(joinedload(QuestionCategory.subject))
    )
    return result.scalars().all()


async def get_question_categories_with_count(
    session: AsyncSession,
    subject_name: str | None = None,
) -> list[dict]:
    """분류 목록 (문제 개수 포함, 과목 이름 필터는 대소문자 무시)"""
    stmt = (
        select(
            QuestionCategory.id,
            QuestionCategory.name,
            QuestionCategory.subject_id,
            func.count(Question.id).label("question_count"),
        )
        .join(Subject, Subject.id == QuestionCategory.subject_id)
        .outerjoin(Question, Question.question_category_id == QuestionCategory.id)
        .group_by(QuestionCategory.id, QuestionCategory.name, QuestionCategory.subject_id)
        .order_by(QuestionCategory.id)
    )
    if subject_name:
        stmt = stmt.where(func.lower(Subject.name) == subject_name.lower())
    result = await session.execute(stmt)
    return [
        {
            "id": row.id,
            "name": row.name,
            "subject_id": row.subject_id,
            "question_count": row.question_count or 0,
        }
        for row in result.all()
    ]


async def create_question_categories(session: AsyncSession, categories: list[dict]) -> list[QuestionCategory]:
    """분류 생성 (여러 건을 한 트랜잭션으로)"""
    new_categories = [QuestionCategory(**data) for data in categories]
    session.add_all(new_categories)
    await session.commit()
    return new_categories


async def has_questions(session: AsyncSession, category_id: int) -> bool:
    result = await session.execute(
        select(Question.id).where(Question.question_category_id == category_id).limit(1)
    )
    return result.first() is not None


async def delete_question_category(session: AsyncSession, category_id: int) -> None:
    """분류 삭제 (세부분류 연결 포함)"""
    await session.execute(
        delete(sub_category_question_categories).where(
            sub_category_question_categories.c.question_category_id == category_id
        )
    )
    await session.execute(delete(QuestionCategory).where(QuestionCategory.id == category_id))
    await session.commit()


async def delete_question_categories(session: AsyncSession, category_ids: list[int]) -> None:
    """분류 여러 건 삭제 (세부분류 연결 포함, 한 트랜잭션)"""
    if not category_ids:
        return
    await session.execute(
        delete(sub_category_question_categories).where(
            sub_category_question_categories.c.question_category_id.in_(category_ids)
        )
    )
    await session.execute(delete(QuestionCategory).where(QuestionCategory.id.in_(category_ids)))
    await session.commit()
