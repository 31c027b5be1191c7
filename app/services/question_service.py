import logging
import math

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import (
    question as question_crud,
    question_category as category_crud,
    sub_category as sub_category_crud,
)
from app.exceptions import QuestionCategoryNotFoundError, QuestionNotFoundError, SubCategoryNotFoundError
from app.models.question import Question
from app.schemas import common, question as question_schema
from app.services.question_rules import normalize_category_name
from app.utils.math_delimiters import normalize_math_delimiters

logger = logging.getLogger(__name__)


def _to_response(question: Question) -> question_schema.QuestionResponse:
    """Question 모델을 QuestionResponse로 변환 (태그/시험 분야는 이름만)"""
    return question_schema.QuestionResponse(
        id=question.id,
        question_number=question.question_number,
        title=question.title,
        content=question.content,
        sub_category_name=question.sub_category_name,
        question_category_name=question.question_category_name,
        subject_name=question.subject_name,
        year=question.year,
        link=question.link,
        is_active=question.is_active,
        tags=[tag.name for tag in question.tags],
        exam_branches=[branch.name for branch in question.exam_branches],
        correct_answer=question.correct_answer,
        correct_answers=question.correct_answers,
        numerical_answer=question.numerical_answer,
        numerical_answer_range=question.numerical_answer_range,
    )


def _pagination(total: int, page: int, limit: int) -> common.Pagination:
    return common.Pagination(total=total, page=page, limit=limit, pages=math.ceil(total / limit))


async def list_questions(
    session: AsyncSession,
    page: int,
    limit: int,
    search: str | None = None,
) -> question_schema.QuestionListResponse:
    """활성 문제 목록 조회"""
    total, questions = await question_crud.list_questions(session, page, limit, search)
    return question_schema.QuestionListResponse(
        message="Questions retrieved successfully",
        data=[_to_response(question) for question in questions],
        pagination=_pagination(total, page, limit),
    )


async def list_questions_by_category(
    session: AsyncSession,
    category_name: str,
    sub_category_name: str,
    page: int,
    limit: int,
) -> question_schema.QuestionListResponse:
    """분류/세부분류 이름으로 문제 조회

    Raises:
        QuestionCategoryNotFoundError: 분류 없음
        SubCategoryNotFoundError: 세부분류가 없거나 분류에 연결되지 않음
    """
    category_name = normalize_category_name(category_name)
    sub_category_name = normalize_category_name(sub_category_name)

    category = await category_crud.get_question_category_by_name(session, category_name)
    if not category:
        raise QuestionCategoryNotFoundError(category_name)

    sub_category = await sub_category_crud.get_sub_category_by_name(session, sub_category_name)
    if not sub_category or category.id not in {c.id for c in sub_category.question_categories}:
        raise SubCategoryNotFoundError(sub_category_name)

    total, questions = await question_crud.list_questions_by_sub_category(
        session,
        category.id,
        sub_category.id,
        page,
        limit,
    )
    return question_schema.QuestionListResponse(
        message="Questions retrieved successfully",
        data=[_to_response(question) for question in questions],
        pagination=_pagination(total, page, limit),
    )


async def delete_question(session: AsyncSession, question_id: int) -> None:
    """문제 삭제 후 세부분류 문제 수 1 감소"""
    question = await question_crud.get_question_by_id(session, question_id)
    if not question:
        raise QuestionNotFoundError(question_id)

    sub_category_id = question.sub_category_id
    await question_crud.delete_question(session, question_id)
    await sub_category_crud.increment_question_counts(session, {sub_category_id: -1})
    await session.commit()
    logger.info(f"문제 삭제: id={question_id}, sub_category_id={sub_category_id}")


async def normalize_question_math(session: AsyncSession) -> question_schema.MathNormalizationResponse:
    """모든 문제 본문의 수식 구분자 정규화"""
    questions = await question_crud.get_all_questions(session)

    updated = 0
    for index, question in enumerate(questions):
        if index % 50 == 0:
            logger.info(f"수식 정규화 진행: {index}/{len(questions)}")
        normalized = normalize_math_delimiters(question.content)
        if normalized != question.content:
            question.content = normalized
            updated += 1

    await session.commit()
    logger.info(f"수식 정규화 완료: total={len(questions)}, updated={updated}")
    return question_schema.MathNormalizationResponse(
        message="Question content normalized",
        total=len(questions),
        updated=updated,
    )
