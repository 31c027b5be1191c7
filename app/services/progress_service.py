"""사용자 주제/문제 진도"""
import logging
from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import (
    question as question_crud,
    subject as subject_crud,
    topic as topic_crud,
    user_question_progress as question_progress_crud,
    user_topic_progress as topic_progress_crud,
)
from app.exceptions import InvalidRequestError, ProgressNotFoundError, QuestionNotFoundError, TopicNotFoundError
from app.models.user import User
from app.models.user_question_progress import UserQuestionProgress
from app.schemas import progress as progress_schema

logger = logging.getLogger(__name__)


def completion_percentage(completed: int, total: int) -> str:
    """소수점 둘째 자리 문자열 (분모 0이면 "0.00")"""
    if total <= 0:
        return "0.00"
    return f"{completed / total * 100:.2f}"


# 주제 진도

async def list_topic_progress(session: AsyncSession, user: User) -> progress_schema.TopicProgressListResponse:
    entries = await topic_progress_crud.get_topic_progress_list(session, user.id)
    return progress_schema.TopicProgressListResponse(
        data=[progress_schema.TopicProgressResponse.model_validate(e) for e in entries]
    )


async def get_topic_progress(
    session: AsyncSession,
    user: User,
    topic_id: int,
) -> progress_schema.TopicProgressItemResponse:
    progress = await topic_progress_crud.get_topic_progress(session, user.id, topic_id)
    if not progress:
        raise ProgressNotFoundError()
    return progress_schema.TopicProgressItemResponse(
        data=progress_schema.TopicProgressResponse.model_validate(progress)
    )


async def update_topic_progress(
    session: AsyncSession,
    user: User,
    topic_id: int,
    request: progress_schema.TopicProgressUpdateRequest,
) -> progress_schema.TopicProgressItemResponse:
    """주제 진도 저장 (복습 필요 표시는 완료로도 간주)"""
    if not await topic_crud.get_topic_by_id(session, topic_id):
        raise TopicNotFoundError(topic_id)

    progress = await topic_progress_crud.upsert_topic_progress(
        session,
        user.id,
        topic_id,
        is_completed=request.to_revise or request.is_completed,
        to_revise=request.to_revise,
    )
    return progress_schema.TopicProgressItemResponse(
        data=progress_schema.TopicProgressResponse.model_validate(progress)
    )


async def delete_topic_progress(session: AsyncSession, user: User, topic_id: int) -> None:
    progress = await topic_progress_crud.get_topic_progress(session, user.id, topic_id)
    if not progress:
        raise ProgressNotFoundError()
    await topic_progress_crud.delete_topic_progress(session, progress.id)


async def bulk_update_topic_progress(
    session: AsyncSession,
    user: User,
    request: progress_schema.TopicProgressBulkUpdateRequest,
) -> progress_schema.TopicProgressListResponse:
    """주제 진도 일괄 저장

    모든 항목을 먼저 검증하고 하나라도 잘못되면 아무것도 저장하지 않는다.
    """
    for index, item in enumerate(request.updates):
        if item.topic_id is None:
            raise InvalidRequestError(f"Update at index {index} is missing topicId")
        if not item.is_completed and not item.to_revise:
            raise InvalidRequestError(
                f"Update at index {index} must set at least one of isCompleted or toRevise"
            )

    topic_ids = list(dict.fromkeys(item.topic_id for item in request.updates))
    known_ids = {topic.id for topic in await topic_crud.get_topics(session)}
    missing = [topic_id for topic_id in topic_ids if topic_id not in known_ids]
    if missing:
        raise TopicNotFoundError(missing[0])

    results = []
    for item in request.updates:
        progress = await topic_progress_crud.upsert_topic_progress(
            session,
            user.id,
            item.topic_id,
            is_completed=item.to_revise or item.is_completed,
            to_revise=item.to_revise,
            commit=False,
        )
        results.append(progress)
    await session.commit()
    logger.info(f"주제 진도 일괄 저장: user={user.user_id}, count={len(results)}")

    return progress_schema.TopicProgressListResponse(
        data=[progress_schema.TopicProgressResponse.model_validate(p) for p in results]
    )


async def bulk_check_topic_progress(
    session: AsyncSession,
    user: User,
    request: progress_schema.TopicProgressBulkCheckRequest,
) -> progress_schema.TopicProgressListResponse:
    entries = await topic_progress_crud.get_topic_progress_list(session, user.id, request.topic_ids)
    return progress_schema.TopicProgressListResponse(
        data=[progress_schema.TopicProgressResponse.model_validate(e) for e in entries]
    )


async def get_topic_progress_summary(
    session: AsyncSession,
    user: User,
) -> progress_schema.TopicProgressSummaryResponse:
    """과목/모듈별 주제 진도 요약"""
    subjects = await subject_crud.get_syllabus(session)
    entries = await topic_progress_crud.get_topic_progress_list(session, user.id)
    flags = {entry.topic_id: entry for entry in entries}

    subject_summaries = []
    total_topics = total_completed = total_to_revise = 0
    for subject in subjects:
        module_summaries = []
        for module in subject.modules:
            topic_ids = [topic.id for topic in module.topics]
            completed = sum(1 for topic_id in topic_ids if topic_id in flags and flags[topic_id].is_completed)
            to_revise = sum(1 for topic_id in topic_ids if topic_id in flags and flags[topic_id].to_revise)
            module_summaries.append(
                progress_schema.ModuleProgressSummary(
                    module_id=module.id,
                    module_name=module.name,
                    total_topics=len(topic_ids),
                    completed=completed,
                    to_revise=to_revise,
                    completion_percentage=completion_percentage(completed, len(topic_ids)),
                )
            )

        subject_total = sum(m.total_topics for m in module_summaries)
        subject_completed = sum(m.completed for m in module_summaries)
        subject_to_revise = sum(m.to_revise for m in module_summaries)
        subject_summaries.append(
            progress_schema.SubjectProgressSummary(
                subject_id=subject.id,
                subject_name=subject.name,
                total_topics=subject_total,
                completed=subject_completed,
                to_revise=subject_to_revise,
                completion_percentage=completion_percentage(subject_completed, subject_total),
                modules=module_summaries,
            )
        )
        total_topics += subject_total
        total_completed += subject_completed
        total_to_revise += subject_to_revise

    return progress_schema.TopicProgressSummaryResponse(
        data=progress_schema.TopicProgressSummary(
            total_topics=total_topics,
            completed=total_completed,
            to_revise=total_to_revise,
            completion_percentage=completion_percentage(total_completed, total_topics),
            subjects=subject_summaries,
        )
    )


# 문제 진도

def _question_progress_response(progress: UserQuestionProgress, question_number: int):
    return progress_schema.QuestionProgressResponse(
        question_id=progress.question_id,
        question_number=question_number,
        time_spent=progress.time_spent,
        is_completed=progress.is_completed,
        to_revise=progress.to_revise,
        remarks=progress.remarks,
        attempted_at=progress.attempted_at,
    )


async def list_question_progress(
    session: AsyncSession,
    user: User,
    question_ids: list[int] | None = None,
) -> progress_schema.QuestionProgressListResponse:
    entries = await question_progress_crud.get_question_progress_list(session, user.id, question_ids)
    return progress_schema.QuestionProgressListResponse(
        data=[_question_progress_response(e, e.question.question_number) for e in entries]
    )


async def bulk_get_question_progress(
    session: AsyncSession,
    user: User,
    request: progress_schema.QuestionProgressBulkGetRequest,
) -> progress_schema.QuestionProgressListResponse:
    """문제 번호 목록으로 진도 조회"""
    questions = await question_crud.get_questions_by_numbers(session, request.question_numbers)
    if not questions:
        return progress_schema.QuestionProgressListResponse(data=[])
    return await list_question_progress(session, user, [question.id for question in questions])


async def get_question_progress(
    session: AsyncSession,
    user: User,
    request: progress_schema.QuestionProgressGetRequest,
) -> progress_schema.QuestionProgressItemResponse:
    question = await question_crud.get_question_by_number(session, request.question_number)
    if not question:
        raise QuestionNotFoundError(request.question_number)

    progress = await question_progress_crud.get_question_progress(session, user.id, question.id)
    if not progress:
        raise ProgressNotFoundError("No progress found for this question")
    return progress_schema.QuestionProgressItemResponse(
        message="Progress retrieved successfully",
        data=_question_progress_response(progress, question.question_number),
    )


async def save_question_progress(
    session: AsyncSession,
    user: User,
    request: progress_schema.QuestionProgressUpdateRequest,
) -> progress_schema.QuestionProgressItemResponse:
    """문제 번호 기준 진도 저장"""
    question = await question_crud.get_question_by_number(session, request.question_number)
    if not question:
        raise QuestionNotFoundError(request.question_number)

    progress = await question_progress_crud.upsert_question_progress(
        session,
        user.id,
        question.id,
        time_spent=request.time_spent,
        is_completed=request.is_completed,
        to_revise=request.to_revise,
        remarks=request.remarks,
    )
    return progress_schema.QuestionProgressItemResponse(
        message="Progress saved successfully",
        data=_question_progress_response(progress, question.question_number),
    )


async def get_question_progress_summary(
    session: AsyncSession,
    user: User,
) -> progress_schema.QuestionProgressSummaryResponse:
    """분류별 문제 진도 요약"""
    rows = await question_crud.get_question_category_rows(session)
    flags = await question_progress_crud.get_progress_flags(session, user.id)

    question_category = {}
    categories: dict[int, dict] = {}
    for question_id, category_id, category_name in rows:
        question_category[question_id] = category_id
        summary = categories.setdefault(
            category_id,
            {"category_name": category_name, "total": 0, "completed": 0, "to_revise": 0},
        )
        summary["total"] += 1

    counted = defaultdict(int)
    for question_id, is_completed, to_revise in flags:
        category_id = question_category.get(question_id)
        if category_id is None:
            continue
        if is_completed:
            categories[category_id]["completed"] += 1
            counted["completed"] += 1
        if to_revise:
            categories[category_id]["to_revise"] += 1
            counted["to_revise"] += 1

    category_summaries = [
        progress_schema.CategoryProgressSummary(
            category_id=category_id,
            category_name=summary["category_name"],
            total_questions=summary["total"],
            completed=summary["completed"],
            to_revise=summary["to_revise"],
            completion_percentage=completion_percentage(summary["completed"], summary["total"]),
        )
        for category_id, summary in sorted(categories.items())
    ]
    return progress_schema.QuestionProgressSummaryResponse(
        data=progress_schema.QuestionProgressSummary(
            total_questions=len(rows),
            total_completed=counted["completed"],
            total_to_revise=counted["to_revise"],
            overall_completion_percentage=completion_percentage(counted["completed"], len(rows)),
            category_summaries=category_summaries,
        )
    )
