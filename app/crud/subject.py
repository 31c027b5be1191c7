from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.module import Module
from app.models.question import Question
from app.models.question_category import QuestionCategory
from app.models.subject import Subject


async def get_subject_by_id(session: AsyncSession, subject_id: int) -> Subject | None:
    """ID로 과목 조회"""
    result = await session.execute(select(Subject).where(Subject.id == subject_id))
    return result.scalar_one_or_none()


async def get_subject_by_name(session: AsyncSession, name: str) -> Subject | None:
    result = await session.execute(select(Subject).where(Subject.name == name))
    return result.scalar_one_or_none()


async def get_subjects_by_names(session: AsyncSession, names: list[str]) -> Sequence[Subject]:
    if not names:
        return []
    result = await session.execute(select(Subject).where(Subject.name.in_(names)))
    return result.scalars().all()


async def get_all_subjects(session: AsyncSession) -> Sequence[Subject]:
    """모든 과목 조회"""
    result = await session.execute(select(Subject).order_by(Subject.id))
    return result.scalars().all()


async def get_all_subjects_with_question_count(session: AsyncSession) -> list[dict]:
    """모든 과목 조회 (문제 개수 포함)"""
    stmt = (
        select(
            Subject.id,
            Subject.name,
            func.count(Question.id).label("question_count"),
        )
        .outerjoin(QuestionCategory, QuestionCategory.subject_id == Subject.id)
        .outerjoin(Question, Question.question_category_id == QuestionCategory.id)
        .group_by(Subject.id, Subject.name)
        .order_by(Subject.id)
    )
    result = await session.execute(stmt)

    subjects = []
    for row in result.all():
        subjects.append({
            "id": row.id,
            "name": row.name,
            "question_count": row.question_count or 0,
        })
    return subjects


async def create_subject(session: AsyncSession, name: str) -> Subject:
    """과목 생성"""
    subject = Subject(name=name)
    session.add(subject)
    await session.commit()
    return subject


async def has_question_categories(session: AsyncSession, subject_id: int) -> bool:
    result = await session.execute(
        select(QuestionCategory.id).where(QuestionCategory.subject_id == subject_id).limit(1)
    )
    return result.first() is not None


async def delete_subject(session: AsyncSession, subject_id: int) -> None:
    await session.execute(delete(Subject).where(Subject.id == subject_id))
    await session.commit()


async def is_any_subject_referenced(session: AsyncSession) -> bool:
    """분류나 모듈이 참조하는 과목이 하나라도 있는지"""
    category = await session.execute(select(QuestionCategory.id).limit(1))
    if category.first() is not None:
        return True
    module = await session.execute(select(Module.id).limit(1))
    return module.first() is not None


async def replace_subjects(session: AsyncSession, names: list[str]) -> list[Subject]:
    """과목 전체 교체 (삭제와 생성을 한 트랜잭션으로)"""
    await session.execute(delete(Subject))
    subjects = [Subject(name=name) for name in names]
    session.add_all(subjects)
    await session.commit()
    return subjects


async def has_modules(session: AsyncSession, subject_id: int) -> bool:
    result = await session.execute(select(Module.id).where(Module.subject_id == subject_id).limit(1))
    return result.first() is not None


async def get_syllabus(session: AsyncSession) -> Sequence[Subject]:
    """과목 → 모듈 → 주제 트리 조회"""
    result = await session.execute(
        select(Subject)
        .options(selectinload(Subject.modules).selectinload(Module.topics))
        .order_by(Subject.id)
    )
    return result.scalars().all()
