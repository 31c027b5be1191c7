from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exam_branch import ExamBranch
from app.models.question import question_exam_branches


async def get_exam_branch_by_id(session: AsyncSession, branch_id: int) -> ExamBranch | None:
    """ID로 시험 분야 조회"""
    result = await session.execute(select(ExamBranch).where(ExamBranch.id == branch_id))
    return result.scalar_one_or_none()


async def get_exam_branch_by_name(session: AsyncSession, name: str) -> ExamBranch | None:
    result = await session.execute(select(ExamBranch).where(ExamBranch.name == name))
    return result.scalar_one_or_none()


async def get_exam_branches_by_names(session: AsyncSession, names: list[str]) -> Sequence[ExamBranch]:
    if not names:
        return []
    result = await session.execute(select(ExamBranch).where(ExamBranch.name.in_(names)))
    return result.scalars().all()


async def get_all_exam_branches(session: AsyncSession) -> Sequence[ExamBranch]:
    result = await session.execute(select(ExamBranch).order_by(ExamBranch.id))
    return result.scalars().all()


async def create_exam_branch(
    session: AsyncSession,
    name: str,
    description: str | None,
    exam_tag_names: list[str],
) -> ExamBranch:
    """시험 분야 생성"""
    branch = ExamBranch(name=name, description=description, exam_tag_names=list(exam_tag_names))
    session.add(branch)
    await session.commit()
    return branch


async def update_exam_tag_names(session: AsyncSession, branch: ExamBranch, exam_tag_names: list[str]) -> ExamBranch:
    """examTagNames 교체 (JSON 컬럼은 새 리스트를 대입해야 변경이 감지된다)"""
    branch.exam_tag_names = list(exam_tag_names)
    await session.commit()
    return branch


async def delete_exam_branch(session: AsyncSession, branch_id: int) -> None:
    await session.execute(
        delete(question_exam_branches).where(question_exam_branches.c.exam_branch_id == branch_id)
    )
    await session.execute(delete(ExamBranch).where(ExamBranch.id == branch_id))
    await session.commit()
