from typing import Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.question import Question, question_exam_branches
from app.models.question_tag import question_tag_links


async def count_questions(session: AsyncSession) -> int:
    """전체 문제 수"""
    total = await session.scalar(select(func.count(Question.id)))
    return total or 0


async def get_existing_links(session: AsyncSession, links: list[str]) -> set[str]:
    """이미 저장된 링크 집합"""
    if not links:
        return set()
    result = await session.execute(select(Question.link).where(Question.link.in_(links)))
    return set(result.scalars().all())


async def add_questions(session: AsyncSession, questions: list[Question]) -> list[Question]:
    """문제 일괄 추가 (flush로 ID 확정, commit은 호출 측)"""
    session.add_all(questions)
    await session.flush()
    return questions


async def get_question_by_id(
    session: AsyncSession,
    question_id: int,
    load_relationships: bool = False,
) -> Question | None:
    """ID로 문제 조회

    Args:
        session: 데이터베이스 세션
        question_id: 문제 ID
        load_relationships: 태그/시험 분야를 eager load할지 여부
    """
    stmt = select(Question).where(Question.id == question_id)
    if load_relationships:
        stmt = stmt.options(selectinload(Question.tags), selectinload(Question.exam_branches))
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_question_by_number(session: AsyncSession, question_number: int) -> Question | None:
    # question_number는 유일성이 보장되지 않으므로 가장 먼저 저장된 문제를 사용
    result = await session.execute(
        select(Question)
        .where(Question.question_number == question_number)
        .order_by(Question.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_questions_by_numbers(session: AsyncSession, question_numbers: list[int]) -> Sequence[Question]:
    if not question_numbers:
        return []
    result = await session.execute(
        select(Question).where(Question.question_number.in_(question_numbers)).order_by(Question.id)
    )
    return result.scalars().all()


async def list_questions(
    session: AsyncSession,
    page: int,
    limit: int,
    search: str | None = None,
) -> tuple[int, Sequence[Question]]:
    """활성 문제 목록 (제목/본문 검색, 최신순)"""
    conditions = [Question.is_active.is_(True)]
    if search:
        pattern = f"%{search.lower()}%"
        conditions.append(
            or_(func.lower(Question.title).like(pattern), func.lower(Question.content).like(pattern))
        )

    total = await session.scalar(select(func.count(Question.id)).where(*conditions))
    result = await session.execute(
        select(Question)
        .where(*conditions)
        .options(selectinload(Question.tags), selectinload(Question.exam_branches))
        .order_by(Question.created_at.desc(), Question.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return total or 0, result.scalars().all()


async def list_questions_by_sub_category(
    session: AsyncSession,
    question_category_id: int,
    sub_category_id: int,
    page: int,
    limit: int,
) -> tuple[int, Sequence[Question]]:
    """분류/세부분류별 활성 문제 (연도 내림차순, 문제 번호 오름차순)"""
    conditions = [
        Question.question_category_id == question_category_id,
        Question.sub_category_id == sub_category_id,
        Question.is_active.is_(True),
    ]
    total = await session.scalar(select(func.count(Question.id)).where(*conditions))
    result = await session.execute(
        select(Question)
        .where(*conditions)
        .options(selectinload(Question.tags), selectinload(Question.exam_branches))
        .order_by(Question.year.desc(), Question.question_number.asc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return total or 0, result.scalars().all()


async def get_all_questions(session: AsyncSession) -> Sequence[Question]:
    result = await session.execute(select(Question).order_by(Question.id))
    return result.scalars().all()


async def get_question_category_rows(session: AsyncSession) -> list[tuple[int, int, str]]:
    """(문제 ID, 분류 ID, 분류 이름) 목록"""
    result = await session.execute(
        select(Question.id, Question.question_category_id, Question.question_category_name)
    )
    return [tuple(row) for row in result.all()]


async def delete_question(session: AsyncSession, question_id: int) -> None:
    """문제와 태그/시험 분야 연결 삭제 (commit 없음)"""
    await session.execute(delete(question_tag_links).where(question_tag_links.c.question_id == question_id))
    await session.execute(
        delete(question_exam_branches).where(question_exam_branches.c.question_id == question_id)
    )
    await session.execute(delete(Question).where(Question.id == question_id))
