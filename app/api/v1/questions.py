import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_admin
from app.models.base import get_db
from app.schemas import common, question as question_schema
from app.services import question_ingestion, question_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post(
    "/create-bulk",
    response_model=question_schema.BulkQuestionCreateResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_bulk_questions(
    request: question_schema.BulkQuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 일괄 생성 API

    레코드별 실패는 201 응답의 errors / alreadyExists / inActiveTagsResults 로 보고한다.
    """
    logger.info(f"문제 일괄 생성 요청: count={len(request.questions)}, branches={request.exam_branch_names}")
    return await question_ingestion.ingest_questions(db, request)


@router.post(
    "/create",
    response_model=question_schema.QuestionCreateResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_question(
    request: question_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 단건 생성 API"""
    return await question_ingestion.create_question(db, request)


@router.get("", response_model=question_schema.QuestionListResponse, dependencies=[Depends(get_current_user)])
async def get_questions(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """문제 목록 조회 API"""
    return await question_service.list_questions(db, page, limit, search)


@router.get("/by-category-subcategory", response_model=question_schema.QuestionListResponse)
async def get_questions_by_category(
    category_name: str = Query(..., alias="categoryName", min_length=1),
    sub_category_name: str = Query(..., alias="subCategoryName", min_length=1),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """분류/세부분류별 문제 조회 API (공개)"""
    return await question_service.list_questions_by_category(db, category_name, sub_category_name, page, limit)


@router.post(
    "/normalize-math",
    response_model=question_schema.MathNormalizationResponse,
    dependencies=[Depends(require_admin)],
)
async def normalize_math(
    db: AsyncSession = Depends(get_db),
):
    """문제 본문 수식 구분자 정규화 API"""
    return await question_service.normalize_question_math(db)


@router.delete("/{question_id}", response_model=common.MessageResponse, dependencies=[Depends(require_admin)])
async def delete_question(
    question_id: int,
    db: AsyncSession = Depends(get_db),
):
    await question_service.delete_question(db, question_id)
    return common.MessageResponse(message="Question deleted successfully")
