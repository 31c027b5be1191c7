"""과목/모듈/주제 및 문제 분류 체계 관리"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import (
    exam_branch as exam_branch_crud,
    module as module_crud,
    question_category as category_crud,
    question_tag as tag_crud,
    sub_category as sub_category_crud,
    subject as subject_crud,
    topic as topic_crud,
)
from app.exceptions import (
    ConflictError,
    ExamBranchNotFoundError,
    InvalidRequestError,
    QuestionTagNotFoundError,
    SubCategoryNotFoundError,
    QuestionCategoryNotFoundError,
    SubjectNotFoundError,
    SyllabusModuleNotFoundError,
)
from app.models.exam_branch import ExamBranch
from app.models.sub_category import SubCategory
from app.schemas import (
    exam_branch as exam_branch_schema,
    module as module_schema,
    question_category as category_schema,
    question_tag as tag_schema,
    sub_category as sub_category_schema,
    subject as subject_schema,
    topic as topic_schema,
)
from app.services.question_rules import normalize_category_name

logger = logging.getLogger(__name__)


# 과목 / 모듈 / 주제

async def list_subjects(session: AsyncSession) -> subject_schema.SubjectListResponse:
    subjects = await subject_crud.get_all_subjects_with_question_count(session)
    responses = [subject_schema.SubjectResponse.model_validate(s) for s in subjects]
    return subject_schema.SubjectListResponse(subjects=responses, total=len(responses))


async def create_subject(
    session: AsyncSession,
    request: subject_schema.SubjectCreateRequest,
) -> subject_schema.SubjectResponse:
    if await subject_crud.get_subject_by_name(session, request.name):
        raise ConflictError(f"Subject '{request.name}' already exists")
    subject = await subject_crud.create_subject(session, request.name)
    logger.info(f"과목 생성: {subject.name}")
    return subject_schema.SubjectResponse(id=subject.id, name=subject.name, question_count=0)


async def delete_subject(session: AsyncSession, subject_id: int) -> None:
    """과목 삭제 (분류나 모듈이 참조 중이면 거부)"""
    subject = await subject_crud.get_subject_by_id(session, subject_id)
    if not subject:
        raise SubjectNotFoundError(subject_id)
    if await subject_crud.has_question_categories(session, subject_id):
        raise InvalidRequestError("Cannot delete subject while question categories reference it")
    if await subject_crud.has_modules(session, subject_id):
        raise InvalidRequestError("Cannot delete subject while modules reference it")
    await subject_crud.delete_subject(session, subject_id)
    logger.info(f"과목 삭제: id={subject_id}")


async def replace_subjects(
    session: AsyncSession,
    request: subject_schema.SubjectReplaceRequest,
) -> subject_schema.SubjectReplaceResponse:
    """기존 과목을 모두 지우고 요청한 과목으로 교체

    분류나 모듈이 과목을 참조하고 있으면 아무것도 바꾸지 않는다.
    """
    names = [name.strip() for name in request.subjects or []]
    if not names or not all(names):
        raise InvalidRequestError("At least one subject is required")
    if await subject_crud.is_any_subject_referenced(session):
        raise InvalidRequestError("Cannot replace subjects while question categories or modules reference them")

    subjects = await subject_crud.replace_subjects(session, list(dict.fromkeys(names)))
    logger.info(f"과목 전체 교체: {[s.name for s in subjects]}")
    return subject_schema.SubjectReplaceResponse(
        message="Old subjects removed and new subjects created successfully",
        subjects_created=[
            subject_schema.SubjectResponse(id=s.id, name=s.name, question_count=0) for s in subjects
        ],
    )


async def create_module(
    session: AsyncSession,
    request: module_schema.ModuleCreateRequest,
) -> module_schema.ModuleResponse:
    if not await subject_crud.get_subject_by_id(session, request.subject_id):
        raise SubjectNotFoundError(request.subject_id)
    if await module_crud.get_module_by_name(session, request.name, request.subject_id):
        raise ConflictError(f"Module '{request.name}' already exists for this subject")
    module = await module_crud.create_module(session, request.name, request.subject_id)
    return module_schema.ModuleResponse.model_validate(module)


async def add_topics(
    session: AsyncSession,
    request: topic_schema.TopicBulkCreateRequest,
) -> topic_schema.TopicListResponse:
    """모듈에 주제 여러 개 추가"""
    if not await module_crud.get_module_by_id(session, request.module_id):
        raise SyllabusModuleNotFoundError(request.module_id)
    topics = await topic_crud.create_topics(
        session,
        request.module_id,
        [topic.model_dump() for topic in request.topics],
    )
    responses = [topic_schema.TopicResponse.model_validate(t) for t in topics]
    return topic_schema.TopicListResponse(topics=responses, total=len(responses))


async def list_topics(session: AsyncSession, module_id: int | None = None) -> topic_schema.TopicListResponse:
    topics = await topic_crud.get_topics(session, module_id)
    responses = [topic_schema.TopicResponse.model_validate(t) for t in topics]
    return topic_schema.TopicListResponse(topics=responses, total=len(responses))


async def get_syllabus(session: AsyncSession) -> subject_schema.SyllabusResponse:
    """과목 → 모듈 → 주제 트리"""
    subjects = await subject_crud.get_syllabus(session)
    return subject_schema.SyllabusResponse(
        message="Syllabus retrieved successfully",
        subjects=[
            subject_schema.SyllabusSubject(
                id=subject.id,
                name=subject.name,
                modules=[
                    subject_schema.SyllabusModule(
                        id=module.id,
                        name=module.name,
                        topics=[
                            subject_schema.SyllabusTopic(
                                id=topic.id,
                                name=topic.name,
                                difficulty=topic.difficulty.value,
                                length=topic.length,
                            )
                            for topic in module.topics
                        ],
                    )
                    for module in subject.modules
                ],
            )
            for subject in subjects
        ],
    )


# 문제 분류 / 세부분류

async def list_question_categories(
    session: AsyncSession,
    subject_name: str | None = None,
) -> category_schema.QuestionCategoryListResponse:
    """분류 목록 (과목 이름은 하이픈을 공백으로 해석)"""
    if subject_name:
        subject_name = subject_name.replace("-", " ")
    categories = await category_crud.get_question_categories_with_count(session, subject_name)
    responses = [category_schema.QuestionCategoryResponse.model_validate(c) for c in categories]
    return category_schema.QuestionCategoryListResponse(categories=responses, total=len(responses))


async def create_question_category(
    session: AsyncSession,
    request: category_schema.QuestionCategoryCreateRequest,
) -> category_schema.QuestionCategoryResponse:
    name = normalize_category_name(request.name)
    if not await subject_crud.get_subject_by_id(session, request.subject_id):
        raise SubjectNotFoundError(request.subject_id)
    if await category_crud.get_question_category_by_name(session, name):
        raise ConflictError(f"Category '{name}' already exists")
    categories = await category_crud.create_question_categories(
        session,
        [{"name": name, "subject_id": request.subject_id}],
    )
    return category_schema.QuestionCategoryResponse.model_validate(categories[0])


async def create_question_categories_bulk(
    session: AsyncSession,
    request: category_schema.QuestionCategoryBulkCreateRequest,
) -> category_schema.QuestionCategoryBulkCreateResponse:
    """분류 일괄 생성 (하나라도 실패하면 전부 생성하지 않음)"""
    subject_names = list({item.subject_name for item in request.categories if item.subject_name})
    subjects_by_name = {s.name: s for s in await subject_crud.get_subjects_by_names(session, subject_names)}

    rows = []
    for item in request.categories:
        if item.subject_name:
            subject = subjects_by_name.get(item.subject_name)
            if not subject:
                raise InvalidRequestError(f"Subject not found with the provided name: {item.subject_name}")
            subject_id = subject.id
        else:
            if not await subject_crud.get_subject_by_id(session, item.subject_id):
                raise InvalidRequestError(f"Subject not found with the provided subjectId: {item.subject_id}")
            subject_id = item.subject_id
        rows.append({"name": normalize_category_name(item.name), "subject_id": subject_id})

    names = [row["name"] for row in rows]
    if len(set(names)) != len(names):
        raise InvalidRequestError("Duplicate category names found in the request")

    existing = await category_crud.get_question_categories_by_names(session, names)
    if existing:
        raise InvalidRequestError(
            f"Some categories already exist: {', '.join(category.name for category in existing)}"
        )

    categories = await category_crud.create_question_categories(session, rows)
    logger.info(f"분류 일괄 생성: {names}")
    return category_schema.QuestionCategoryBulkCreateResponse(
        message="Question categories created successfully",
        categories=[category_schema.QuestionCategoryResponse.model_validate(c) for c in categories],
    )


async def delete_question_category(session: AsyncSession, category_id: int) -> None:
    if not await category_crud.get_question_category_by_id(session, category_id):
        raise QuestionCategoryNotFoundError(category_id)
    if await category_crud.has_questions(session, category_id):
        raise InvalidRequestError("Cannot delete category while questions reference it")
    await category_crud.delete_question_category(session, category_id)


async def delete_question_categories_bulk(
    session: AsyncSession,
    request: category_schema.QuestionCategoryBulkDeleteRequest,
) -> category_schema.QuestionCategoryBulkDeleteResponse:
    """분류 일괄 삭제 (하나라도 삭제할 수 없으면 전부 삭제하지 않음)"""
    for item in request.categories:
        if item.id is None and not item.name:
            raise InvalidRequestError("Each category must have a name or id")
        if item.id is not None and item.name:
            raise InvalidRequestError("Both id and name cannot be provided. Provide only one.")

    categories = {}
    for item in request.categories:
        if item.id is not None:
            category = await category_crud.get_question_category_by_id(session, item.id)
        else:
            category = await category_crud.get_question_category_by_name(session, normalize_category_name(item.name))
        if not category:
            raise QuestionCategoryNotFoundError(item.id if item.id is not None else item.name)
        if await category_crud.has_questions(session, category.id):
            raise InvalidRequestError(f"Cannot delete category while questions reference it: {category.name}")
        categories[category.id] = category

    deleted = [category_schema.QuestionCategoryResponse.model_validate(c) for c in categories.values()]
    await category_crud.delete_question_categories(session, list(categories))
    logger.info(f"분류 일괄 삭제: {[c.name for c in deleted]}")
    return category_schema.QuestionCategoryBulkDeleteResponse(
        message="Question categories deleted successfully",
        deleted_categories=deleted,
    )


def _sub_category_response(sub_category: SubCategory) -> sub_category_schema.SubCategoryResponse:
    return sub_category_schema.SubCategoryResponse(
        id=sub_category.id,
        name=sub_category.name,
        question_count=sub_category.question_count,
        question_category_ids=[category.id for category in sub_category.question_categories],
    )


async def list_sub_categories(
    session: AsyncSession,
    category_name: str,
) -> sub_category_schema.SubCategoryListResponse:
    """분류에 연결된 세부분류 목록"""
    category_name = normalize_category_name(category_name)
    category = await category_crud.get_question_category_by_name(session, category_name)
    if not category:
        raise QuestionCategoryNotFoundError(category_name)
    sub_categories = await sub_category_crud.get_sub_categories_for_categories(session, [category.id])
    responses = [_sub_category_response(s) for s in sub_categories]
    return sub_category_schema.SubCategoryListResponse(sub_categories=responses, total=len(responses))


async def create_sub_categories_bulk(
    session: AsyncSession,
    request: sub_category_schema.SubCategoryBulkCreateRequest,
) -> sub_category_schema.SubCategoryBulkCreateResponse:
    """세부분류 일괄 생성/연결

    이미 있는 세부분류에는 빠진 분류만 추가한다. 항목별 실패는 failed에 모은다.
    """
    results = sub_category_schema.SubCategoryBulkResults()

    for item in request.sub_categories:
        if not item.name or not item.question_category_names:
            results.failed.append(
                sub_category_schema.SubCategoryBulkFailure(
                    name=item.name or "Unknown",
                    reason="Name and at least one question category name are required",
                )
            )
            continue

        requested_names = list(dict.fromkeys(item.question_category_names))
        categories = await category_crud.get_question_categories_by_names(session, requested_names)
        found = {category.name: category for category in categories}
        missing = [name for name in requested_names if name not in found]
        if missing:
            results.failed.append(
                sub_category_schema.SubCategoryBulkFailure(
                    name=item.name,
                    reason=f'Question category with name "{missing[0]}" not found',
                )
            )
            continue

        existing = await sub_category_crud.get_sub_category_by_name(session, item.name)
        if existing is None:
            sub_category = await sub_category_crud.create_sub_category(
                session,
                item.name,
                [found[name] for name in requested_names],
            )
            results.success.append(
                sub_category_schema.SubCategoryBulkSuccess(name=item.name, id=sub_category.id, is_new=True)
            )
            continue

        linked_ids = {category.id for category in existing.question_categories}
        new_ids = [found[name].id for name in requested_names if found[name].id not in linked_ids]
        if new_ids:
            await sub_category_crud.add_categories_to_sub_category(session, existing.id, new_ids)
            logger.info(f"세부분류 '{existing.name}'에 분류 연결 추가: {new_ids}")
        results.success.append(
            sub_category_schema.SubCategoryBulkSuccess(name=item.name, id=existing.id, is_new=False)
        )

    return sub_category_schema.SubCategoryBulkCreateResponse(
        message="Bulk subcategory creation/update completed",
        results=results,
    )


async def delete_sub_category(session: AsyncSession, sub_category_id: int) -> None:
    if not await sub_category_crud.get_sub_category_by_id(session, sub_category_id):
        raise SubCategoryNotFoundError(sub_category_id)
    if await sub_category_crud.has_questions(session, sub_category_id):
        raise InvalidRequestError("Cannot delete subcategory while questions reference it")
    await sub_category_crud.delete_sub_category(session, sub_category_id)


async def delete_sub_categories_bulk(
    session: AsyncSession,
    request: sub_category_schema.SubCategoryBulkDeleteRequest,
) -> sub_category_schema.SubCategoryBulkDeleteResponse:
    """이름 또는 ID 목록으로 세부분류 일괄 삭제

    항목별로 처리하고 찾을 수 없거나 문제가 참조 중인 항목은 failed에 모은다.
    """
    if request.sub_category_names and request.sub_category_ids:
        raise InvalidRequestError("Both subCategoryNames and subCategoryIds cannot be provided. Provide only one.")
    identifiers = request.sub_category_names or request.sub_category_ids
    if not identifiers:
        raise InvalidRequestError("At least one subcategory name or id is required")

    results = sub_category_schema.SubCategoryBulkDeleteResults()
    for identifier in dict.fromkeys(identifiers):
        if isinstance(identifier, int):
            sub_category = await sub_category_crud.get_sub_category_by_id(session, identifier)
        else:
            sub_category = await sub_category_crud.get_sub_category_by_name(session, identifier)

        if sub_category is None:
            reason = "Subcategory not found"
        elif await sub_category_crud.has_questions(session, sub_category.id):
            reason = "Cannot delete subcategory while questions reference it"
        else:
            await sub_category_crud.delete_sub_category(session, sub_category.id)
            results.success.append(sub_category_schema.SubCategoryDeleteSuccess(identifier=identifier))
            continue
        results.failed.append(sub_category_schema.SubCategoryDeleteFailure(identifier=identifier, reason=reason))

    logger.info(f"세부분류 일괄 삭제: 성공 {len(results.success)}, 실패 {len(results.failed)}")
    return sub_category_schema.SubCategoryBulkDeleteResponse(
        message="Bulk subcategory deletion completed",
        results=results,
    )


# 태그

async def list_question_tags(session: AsyncSession) -> tag_schema.QuestionTagListResponse:
    tags = await tag_crud.get_all_question_tags(session)
    responses = [tag_schema.QuestionTagResponse.model_validate(t) for t in tags]
    return tag_schema.QuestionTagListResponse(tags=responses, total=len(responses))


async def create_question_tag(
    session: AsyncSession,
    request: tag_schema.QuestionTagCreateRequest,
) -> tag_schema.QuestionTagResponse:
    if await tag_crud.get_question_tag_by_name(session, request.name):
        raise ConflictError(f"Question tag '{request.name}' already exists")
    tag = await tag_crud.create_question_tag(session, request.name, request.is_active)
    return tag_schema.QuestionTagResponse.model_validate(tag)


async def update_question_tag(
    session: AsyncSession,
    tag_id: int,
    request: tag_schema.QuestionTagUpdateRequest,
) -> tag_schema.QuestionTagResponse:
    """태그 활성 상태 변경"""
    tag = await tag_crud.get_question_tag_by_id(session, tag_id)
    if not tag:
        raise QuestionTagNotFoundError(tag_id)
    tag = await tag_crud.update_question_tag_active(session, tag, request.is_active)
    logger.info(f"태그 '{tag.name}' is_active={tag.is_active}")
    return tag_schema.QuestionTagResponse.model_validate(tag)


# 시험 분야

async def list_exam_branches(session: AsyncSession) -> exam_branch_schema.ExamBranchListResponse:
    branches = await exam_branch_crud.get_all_exam_branches(session)
    responses = [exam_branch_schema.ExamBranchResponse.model_validate(b) for b in branches]
    return exam_branch_schema.ExamBranchListResponse(exam_branches=responses, total=len(responses))


async def create_exam_branch(
    session: AsyncSession,
    request: exam_branch_schema.ExamBranchCreateRequest,
) -> exam_branch_schema.ExamBranchResponse:
    if await exam_branch_crud.get_exam_branch_by_name(session, request.name):
        raise ConflictError(f"Exam branch '{request.name}' already exists")
    branch = await exam_branch_crud.create_exam_branch(
        session,
        request.name,
        request.description,
        list(dict.fromkeys(request.exam_tag_names)),
    )
    return exam_branch_schema.ExamBranchResponse.model_validate(branch)


async def _get_branch(session: AsyncSession, name: str) -> ExamBranch:
    branch = await exam_branch_crud.get_exam_branch_by_name(session, name)
    if not branch:
        raise ExamBranchNotFoundError(name)
    return branch


async def add_exam_tag_names(
    session: AsyncSession,
    branch_name: str,
    request: exam_branch_schema.ExamTagNamesAddRequest,
) -> exam_branch_schema.ExamTagNamesAddResponse:
    """examTagNames 끝에 새 이름만 추가"""
    branch = await _get_branch(session, branch_name)
    current = list(branch.exam_tag_names or [])
    added = [name for name in dict.fromkeys(request.exam_tag_names) if name not in current]
    if not added:
        raise InvalidRequestError("All provided tag names already exist in this exam branch")

    branch = await exam_branch_crud.update_exam_tag_names(session, branch, current + added)
    return exam_branch_schema.ExamTagNamesAddResponse(
        message=f"{len(added)} tag name(s) added successfully",
        exam_branch=exam_branch_schema.ExamBranchResponse.model_validate(branch),
        added_tags=added,
    )


async def update_exam_tag_name(
    session: AsyncSession,
    branch_name: str,
    request: exam_branch_schema.ExamTagNameUpdateRequest,
) -> exam_branch_schema.ExamBranchUpdateResponse:
    """태그 이름 하나 변경 (위치 유지)"""
    branch = await _get_branch(session, branch_name)
    current = list(branch.exam_tag_names or [])
    if request.old_tag_name not in current:
        raise InvalidRequestError("Old tag name does not exist in this exam branch")
    if request.new_tag_name in current:
        raise InvalidRequestError("New tag name already exists in this exam branch")

    current[current.index(request.old_tag_name)] = request.new_tag_name
    branch = await exam_branch_crud.update_exam_tag_names(session, branch, current)
    return exam_branch_schema.ExamBranchUpdateResponse(
        message="Tag name updated successfully",
        exam_branch=exam_branch_schema.ExamBranchResponse.model_validate(branch),
    )


async def remove_exam_tag_name(
    session: AsyncSession,
    branch_name: str,
    tag_name: str,
) -> exam_branch_schema.ExamBranchUpdateResponse:
    branch = await _get_branch(session, branch_name)
    current = list(branch.exam_tag_names or [])
    if tag_name not in current:
        raise InvalidRequestError("Tag name does not exist in this exam branch")

    current.remove(tag_name)
    branch = await exam_branch_crud.update_exam_tag_names(session, branch, current)
    return exam_branch_schema.ExamBranchUpdateResponse(
        message="Tag name removed successfully",
        exam_branch=exam_branch_schema.ExamBranchResponse.model_validate(branch),
    )


async def delete_exam_branch(session: AsyncSession, branch_id: int) -> None:
    if not await exam_branch_crud.get_exam_branch_by_id(session, branch_id):
        raise ExamBranchNotFoundError(branch_id)
    await exam_branch_crud.delete_exam_branch(session, branch_id)
    logger.info(f"시험 분야 삭제: id={branch_id}")
