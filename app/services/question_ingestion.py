"""문제 일괄 import 파이프라인

1) 분류/태그/세부분류를 배치 단위로 조회해 레코드별로 검증하고
2) 통과한 문제를 한 번에 저장한 뒤 태그 역참조와 세부분류 문제 수를 갱신한다.
레코드 단위 실패는 결과 버킷에 모으고 배치 전체를 중단하지 않는다.
"""
import logging
import random
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.crud import (
    exam_branch as exam_branch_crud,
    question as question_crud,
    question_category as category_crud,
    question_tag as tag_crud,
    sub_category as sub_category_crud,
)
from app.exceptions import InvalidRequestError, QuestionIntegrityError
from app.models.exam_branch import ExamBranch
from app.models.question import Question
from app.models.question_category import QuestionCategory
from app.models.sub_category import SubCategory
from app.schemas import question as question_schema
from app.services.question_rules import (
    AnswerFields,
    AnswerValidationError,
    QuestionKind,
    build_exam_tag_map,
    check_answer_fields,
    check_year,
    classify_question_kind,
    find_question_year,
    normalize_category_name,
    parse_answer,
)

logger = logging.getLogger(__name__)

QUESTION_NUMBER_BASE = 100000
QUESTION_NUMBER_STEP = 3

DUPLICATE_LINK_MESSAGE = "Question with this link already exists"


@dataclass
class PreparedQuestion:
    """검증을 통과해 저장만 남은 문제"""
    question: Question
    tag_ids: list[int]
    tag_names: list[str]
    sub_category: SubCategory
    kind: QuestionKind


@dataclass
class ProcessedBatch:
    processed: list[PreparedQuestion] = field(default_factory=list)
    errors: list[question_schema.BulkQuestionError] = field(default_factory=list)
    inactive_tag_results: list[question_schema.InactiveTagsResult] = field(default_factory=list)


def _unique(values) -> list:
    """순서를 유지한 중복 제거"""
    return list(dict.fromkeys(values))


def _match_sub_category(
    candidates: Sequence[SubCategory],
    category: QuestionCategory,
    tag_names: Sequence[str],
) -> SubCategory | None:
    """태그 이름과 같은 세부분류 우선, 없으면 분류 이름과 같은 세부분류"""
    tag_set = set(tag_names)
    for sub_category in candidates:
        if sub_category.name in tag_set and sub_category.name != category.name:
            return sub_category
    for sub_category in candidates:
        if sub_category.name == category.name:
            return sub_category
    return None


def _answer_columns(fields: AnswerFields) -> dict:
    return {
        "correct_answer": fields.correct_answer,
        "correct_answers": fields.correct_answers,
        "numerical_answer": fields.numerical_answer,
        "numerical_answer_min": fields.numerical_answer_min,
        "numerical_answer_max": fields.numerical_answer_max,
    }


async def process_bulk_questions(
    session: AsyncSession,
    records: Sequence[question_schema.QuestionRecord],
    exam_branches: Sequence[ExamBranch],
    year_branch_names: Sequence[str] | None = None,
) -> ProcessedBatch:
    """레코드 검증 및 저장할 Question 객체 구성

    Args:
        session: 데이터베이스 세션
        records: import 레코드 (링크 중복은 호출 측에서 제거)
        exam_branches: 문제에 연결할 시험 분야
        year_branch_names: 연도 태그를 확인할 시험 분야 이름 (기본값 settings.year_branch_name)

    없는 태그는 새로 만들어 flush 한다. commit은 호출 측 책임이다.
    """
    batch = ProcessedBatch()
    if not records:
        return batch

    candidate_branch_names = list(year_branch_names or [settings.year_branch_name])
    exam_tag_map = build_exam_tag_map(exam_branches)

    # 분류: 정규화된 이름 집합으로 한 번에 조회
    category_names = _unique(normalize_category_name(record.category) for record in records)
    categories = await category_crud.get_question_categories_by_names(session, category_names)
    category_map = {category.name: category for category in categories}

    # 태그: 배치 전체 합집합 조회 후 없는 태그 생성
    all_tag_names = _unique(tag for record in records for tag in record.tags)
    existing_tags = await tag_crud.get_question_tags_by_names(session, all_tag_names)
    existing_names = {tag.name for tag in existing_tags}
    missing_tag_names = [name for name in all_tag_names if name not in existing_names]
    new_tags = await tag_crud.add_question_tags(session, missing_tag_names)
    if new_tags:
        logger.info(f"새 태그 생성: {missing_tag_names}")
    tag_map = {tag.name: tag for tag in [*existing_tags, *new_tags]}

    # 세부분류: 조회된 분류에 연결된 후보 전체
    sub_categories = await sub_category_crud.get_sub_categories_for_categories(
        session,
        [category.id for category in categories],
    )
    candidates_by_category: dict[int, list[SubCategory]] = defaultdict(list)
    for sub_category in sub_categories:
        for linked in sub_category.question_categories:
            candidates_by_category[linked.id].append(sub_category)

    question_count = await question_crud.count_questions(session)
    base_number = QUESTION_NUMBER_BASE + question_count * QUESTION_NUMBER_STEP

    for index, record in enumerate(records):
        link = record.link

        category = category_map.get(normalize_category_name(record.category))
        if category is None:
            batch.errors.append(
                question_schema.BulkQuestionError(
                    error=f"Question category '{record.category}' not found",
                    link=link,
                )
            )
            continue

        subject = category.subject
        if subject is None:
            batch.errors.append(
                question_schema.BulkQuestionError(
                    error=f"Subject not found for category '{record.category}'",
                    link=link,
                )
            )
            continue

        if not link:
            batch.errors.append(question_schema.BulkQuestionError(error="Question link is required"))
            continue

        tag_names = _unique(record.tags)
        inactive = [name for name in tag_names if not tag_map[name].is_active]
        if inactive:
            batch.inactive_tag_results.append(
                question_schema.InactiveTagsResult(in_active_tags=inactive, link=link)
            )
            continue

        sub_category = _match_sub_category(candidates_by_category.get(category.id, []), category, tag_names)
        if sub_category is None:
            batch.errors.append(
                question_schema.BulkQuestionError(
                    error=f"Subcategory not found for question '{record.title}'",
                    link=link,
                )
            )
            continue

        kind = classify_question_kind(tag_names)
        try:
            answer_fields = parse_answer(kind, record.answer)
        except AnswerValidationError as e:
            batch.errors.append(question_schema.BulkQuestionError(error=str(e), link=link))
            continue

        year = find_question_year(tag_names, exam_tag_map, candidate_branch_names)
        if year is None:
            batch.errors.append(
                question_schema.BulkQuestionError(
                    year_error=f"No year tag (containing a 4-digit number) found for question '{record.title}'",
                    link=link,
                )
            )
            continue

        question = Question(
            question_number=base_number
            + (index + 1) * QUESTION_NUMBER_STEP
            + random.randint(0, QUESTION_NUMBER_STEP - 1),
            title=record.title,
            content=record.content,
            sub_category_id=sub_category.id,
            sub_category_name=sub_category.name,
            question_category_id=category.id,
            question_category_name=category.name,
            subject_name=subject.name,
            year=year,
            link=link,
            is_active=record.is_active,
            **_answer_columns(answer_fields),
        )
        question.exam_branches = list(exam_branches)
        batch.processed.append(
            PreparedQuestion(
                question=question,
                tag_ids=[tag_map[name].id for name in tag_names],
                tag_names=tag_names,
                sub_category=sub_category,
                kind=kind,
            )
        )

    logger.debug(
        f"문제 검증 완료: total={len(records)}, processed={len(batch.processed)}, "
        f"errors={len(batch.errors)}, inactive={len(batch.inactive_tag_results)}"
    )
    return batch


def ensure_question_invariants(
    question: Question,
    tag_names: Sequence[str],
    exam_branches: Sequence[ExamBranch],
    sub_category: SubCategory,
) -> None:
    """저장 직전 문제 불변식 확인

    Raises:
        QuestionIntegrityError: 정답 형식/연도/시험 분야/세부분류 연결 위반
    """
    if not question.link:
        raise QuestionIntegrityError("Question link is required")
    if not exam_branches:
        raise QuestionIntegrityError("Question must be linked to at least one exam branch")

    kind = classify_question_kind(tag_names)
    fields = AnswerFields(
        correct_answer=question.correct_answer,
        correct_answers=question.correct_answers,
        numerical_answer=question.numerical_answer,
        numerical_answer_min=question.numerical_answer_min,
        numerical_answer_max=question.numerical_answer_max,
    )
    message = check_answer_fields(kind, fields)
    if message:
        raise QuestionIntegrityError(message)

    exam_tag_names = [tag for branch in exam_branches for tag in (branch.exam_tag_names or [])]
    message = check_year(question.year, tag_names, exam_tag_names)
    if message:
        raise QuestionIntegrityError(message)

    if question.question_category_id not in {category.id for category in sub_category.question_categories}:
        raise QuestionIntegrityError(
            f"SubCategory '{sub_category.name}' is not linked to category '{question.question_category_name}'"
        )


async def create_bulk_questions(
    session: AsyncSession,
    prepared: Sequence[PreparedQuestion],
) -> list[Question]:
    """검증된 문제 일괄 저장 후 태그 역참조/세부분류 문제 수 갱신 (commit 없음)"""
    if not prepared:
        return []

    for item in prepared:
        ensure_question_invariants(item.question, item.tag_names, item.question.exam_branches, item.sub_category)

    questions = await question_crud.add_questions(session, [item.question for item in prepared])

    tag_updates: dict[int, list[int]] = defaultdict(list)
    sub_category_counts: dict[int, int] = defaultdict(int)
    for item in prepared:
        for tag_id in item.tag_ids:
            tag_updates[tag_id].append(item.question.id)
        sub_category_counts[item.sub_category.id] += 1

    await tag_crud.add_question_links(session, dict(tag_updates))
    await sub_category_crud.increment_question_counts(session, dict(sub_category_counts))

    logger.info(
        f"문제 저장 완료: questions={len(questions)}, tags={len(tag_updates)}, "
        f"sub_categories={dict(sub_category_counts)}"
    )
    return questions


async def _resolve_exam_branches(session: AsyncSession, names: Sequence[str]) -> list[ExamBranch]:
    names = _unique(name for name in names if name)
    if not names:
        raise InvalidRequestError("At least one exam branch name is required")
    branches = await exam_branch_crud.get_exam_branches_by_names(session, names)
    found = {branch.name for branch in branches}
    missing = [name for name in names if name not in found]
    if missing:
        raise InvalidRequestError(f"Exam branches not found: {', '.join(missing)}")
    return sorted(branches, key=lambda branch: names.index(branch.name))


def _success_item(question: Question) -> question_schema.BulkQuestionSuccess:
    return question_schema.BulkQuestionSuccess(
        question_id=question.id,
        question_number=question.question_number,
        title=question.title,
        answer=question.answer,
        link=question.link,
    )


async def ingest_questions(
    session: AsyncSession,
    request: question_schema.BulkQuestionCreateRequest,
) -> question_schema.BulkQuestionCreateResponse:
    """문제 일괄 생성 (레코드별 결과를 버킷으로 나눠 반환)"""
    if not request.questions:
        raise InvalidRequestError("Questions must be provided as a non-empty object")
    exam_branches = await _resolve_exam_branches(session, request.exam_branch_names)

    records = list(request.questions.values())
    results = question_schema.BulkQuestionResults()

    existing_links = await question_crud.get_existing_links(
        session,
        _unique(record.link for record in records if record.link),
    )
    seen_links: set[str] = set()
    pending: list[question_schema.QuestionRecord] = []
    for record in records:
        if record.link and (record.link in existing_links or record.link in seen_links):
            results.already_exists.append(
                question_schema.BulkQuestionError(error=DUPLICATE_LINK_MESSAGE, link=record.link)
            )
            continue
        if record.link:
            seen_links.add(record.link)
        pending.append(record)

    batch = await process_bulk_questions(
        session,
        pending,
        exam_branches,
        year_branch_names=[branch.name for branch in exam_branches],
    )
    results.errors.extend(batch.errors)
    results.in_active_tags_results.extend(batch.inactive_tag_results)

    questions = await create_bulk_questions(session, batch.processed)
    await session.commit()
    results.success.extend(_success_item(question) for question in questions)

    summary = question_schema.BulkQuestionSummary(
        total=len(records),
        successful=len(results.success),
        failed=len(results.errors),
        already_exists=len(results.already_exists),
        in_active_tags=len(results.in_active_tags_results),
    )
    logger.info(f"문제 import 완료: {summary.model_dump()}")
    return question_schema.BulkQuestionCreateResponse(
        message="Questions processing completed",
        summary=summary,
        results=results,
    )


async def create_question(
    session: AsyncSession,
    request: question_schema.QuestionCreateRequest,
) -> question_schema.QuestionCreateResponse:
    """문제 단건 생성 (첫 번째 오류를 400으로 반환)"""
    exam_branches = await _resolve_exam_branches(session, request.exam_branch_names)

    if request.link and await question_crud.get_existing_links(session, [request.link]):
        raise InvalidRequestError(DUPLICATE_LINK_MESSAGE)

    record = question_schema.QuestionRecord.model_validate(request.model_dump(exclude={"exam_branch_names"}))
    batch = await process_bulk_questions(
        session,
        [record],
        exam_branches,
        year_branch_names=[branch.name for branch in exam_branches],
    )
    if batch.errors:
        first = batch.errors[0]
        await session.commit()
        raise InvalidRequestError(first.error or first.year_error)
    if batch.inactive_tag_results:
        await session.commit()
        raise InvalidRequestError(f"Inactive tags: {', '.join(batch.inactive_tag_results[0].in_active_tags)}")

    prepared = batch.processed[0]
    questions = await create_bulk_questions(session, batch.processed)
    await session.commit()

    question = questions[0]
    logger.info(f"문제 생성: id={question.id}, number={question.question_number}")
    return question_schema.QuestionCreateResponse(
        message="Question created successfully",
        data=question_schema.QuestionCreateData(
            question_id=question.id,
            question_number=question.question_number,
            title=question.title,
            content=question.content,
            category=request.category,
            tags=prepared.tag_names,
            year=question.year,
            link=question.link,
            answer=question.answer,
        ),
    )
