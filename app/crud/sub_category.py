import logging
from typing import Sequence

from sqlalchemy import bindparam, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question
from app.models.question_category import QuestionCategory
from app.models.sub_category import SubCategory, sub_category_question_categories

logger = logging.getLogger(__name__)


async def get_sub_category_by_id(session: AsyncSession, sub_category_id: int) -> SubCategory | None:
    """ID로 세부분류 조회"""
    result = await session.execute(select(SubCategory).where(SubCategory.id == sub_category_id))
    return result.scalar_one_or_none()


async def get_sub_category_by_name(session: AsyncSession, name: str) -> SubCategory | None:
    """이름으로 세부분류 조회 (대소문자 무시, 분류 연결은 항상 다시 읽음)"""
    result = await session.execute(
        select(SubCategory)
        .where(func.lower(SubCategory.name) == name.lower())
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_sub_categories_for_categories(
    session: AsyncSession,
    category_ids: list[int],
) -> Sequence[SubCategory]:
    """분류 목록 중 하나라도 연결된 세부분류 (id 순)"""
    if not category_ids:
        return []
    linked_ids = select(sub_category_question_categories.c.sub_category_id).where(
        sub_category_question_categories.c.question_category_id.in_(category_ids)
    )
    result = await session.execute(
        select(SubCategory).where(SubCategory.id.in_(linked_ids)).order_by(SubCategory.id)
    )
    return result.scalars().all()


async def create_sub_category(
    session: AsyncSession,
    name: str,
    categories: list[QuestionCategory],
) -> SubCategory:
    """세부분류 생성"""
    sub_category = SubCategory(name=name, question_categories=list(categories))
    session.add(sub_category)
    await session.commit()
    return sub_category


async def add_categories_to_sub_category(
    session: AsyncSession,
    sub_category_id: int,
    category_ids: list[int],
) -> None:
    """기존 세부분류에 분류 연결 추가 (호출 측에서 중복 제거)"""
    if not category_ids:
        return
    await session.execute(
        insert(sub_category_question_categories),
        [
            {"sub_category_id": sub_category_id, "question_category_id": category_id}
            for category_id in category_ids
        ],
    )
    await session.commit()


async def increment_question_counts(session: AsyncSession, counts: dict[int, int]) -> None:
    """세부분류별 question_count 증감 (단일 executemany, commit 없음)

    SET question_count = question_count + :n 형태라 동시 갱신 시에도 값이 유실되지 않는다.
    """
    if not counts:
        return
    table = SubCategory.__table__
    stmt = (
        update(table)
        .where(table.c.id == bindparam("b_id"))
        .values(question_count=table.c.question_count + bindparam("b_count"))
    )
    await session.execute(
        stmt,
        [{"b_id": sub_category_id, "b_count": count} for sub_category_id, count in counts.items()],
    )
    logger.debug(f"세부분류 문제 수 갱신: {counts}")


async def has_questions(session: AsyncSession, sub_category_id: int) -> bool:
    result = await session.execute(
        select(Question.id).where(Question.sub_category_id == sub_category_id).limit(1)
    )
    return result.first() is not None


async def delete_sub_category(session: AsyncSession, sub_category_id: int) -> None:
    """세부분류 삭제 (분류 연결 포함)"""
    await session.execute(
        delete(sub_category_question_categories).where(
            sub_category_question_categories.c.sub_category_id == sub_category_id
        )
    )
    await session.execute(delete(SubCategory).where(SubCategory.id == sub_category_id))
    await session.commit()
