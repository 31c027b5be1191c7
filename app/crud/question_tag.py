import logging
from typing import Sequence

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question_tag import QuestionTag, question_tag_links

logger = logging.getLogger(__name__)


async def get_question_tag_by_id(session: AsyncSession, tag_id: int) -> QuestionTag | None:
    """ID로 태그 조회"""
    result = await session.execute(select(QuestionTag).where(QuestionTag.id == tag_id))
    return result.scalar_one_or_none()


async def get_question_tag_by_name(session: AsyncSession, name: str) -> QuestionTag | None:
    result = await session.execute(select(QuestionTag).where(QuestionTag.name == name))
    return result.scalar_one_or_none()


async def get_question_tags_by_names(session: AsyncSession, names: list[str]) -> Sequence[QuestionTag]:
    if not names:
        return []
    result = await session.execute(select(QuestionTag).where(QuestionTag.name.in_(names)))
    return result.scalars().all()


async def get_all_question_tags(session: AsyncSession) -> Sequence[QuestionTag]:
    result = await session.execute(select(QuestionTag).order_by(QuestionTag.name))
    return result.scalars().all()


async def add_question_tags(session: AsyncSession, names: list[str]) -> list[QuestionTag]:
    """태그 일괄 추가 (flush만 수행, commit은 호출 측)"""
    new_tags = [QuestionTag(name=name, is_active=True) for name in names]
    if new_tags:
        session.add_all(new_tags)
        await session.flush()
    return new_tags


async def create_question_tag(session: AsyncSession, name: str, is_active: bool = True) -> QuestionTag:
    """태그 생성"""
    tag = QuestionTag(name=name, is_active=is_active)
    session.add(tag)
    await session.commit()
    return tag


async def update_question_tag_active(session: AsyncSession, tag: QuestionTag, is_active: bool) -> QuestionTag:
    tag.is_active = is_active
    await session.commit()
    return tag


async def add_question_links(session: AsyncSession, tag_updates: dict[int, list[int]]) -> None:
    """태그별 문제 역참조 추가 (단일 다중 행 insert, commit 없음)"""
    rows = [
        {"question_tag_id": tag_id, "question_id": question_id}
        for tag_id, question_ids in tag_updates.items()
        for question_id in question_ids
    ]
    if not rows:
        return
    await session.execute(insert(question_tag_links), rows)
    logger.debug(f"태그 역참조 추가: tags={len(tag_updates)}, links={len(rows)}")


async def get_tag_names_by_question_ids(
    session: AsyncSession,
    question_ids: list[int],
) -> dict[int, list[str]]:
    """{문제 ID: 태그 이름 목록}"""
    if not question_ids:
        return {}
    result = await session.execute(
        select(question_tag_links.c.question_id, QuestionTag.name)
        .join(QuestionTag, QuestionTag.id == question_tag_links.c.question_tag_id)
        .where(question_tag_links.c.question_id.in_(question_ids))
        .order_by(question_tag_links.c.question_id, QuestionTag.id)
    )
    tag_names: dict[int, list[str]] = {question_id: [] for question_id in question_ids}
    for question_id, name in result.all():
        tag_names[question_id].append(name)
    return tag_names
