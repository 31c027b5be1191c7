from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.models.base import get_db
from app.schemas import common, question_category as category_schema
from app.services import taxonomy_service

router = APIRouter(prefix="/question-categories", tags=["question-categories"])


@router.get("", response_model=category_schema.QuestionCategoryListResponse)
async def get_question_categories(
    subject: str | None = Query(None, description="과목 이름 (하이픈은 공백으로 해석)"),
    db: AsyncSession = Depends(get_db),
):
    """문제 분류 목록 조회 API (문제 개수 포함)"""
    return await taxonomy_service.list_question_categories(db, subject)


@router.post(
    "",
    response_model=category_schema.QuestionCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_question_category(
    request: category_schema.QuestionCategoryCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.create_question_category(db, request)


@router.post(
    "/create-bulk",
    response_model=category_schema.QuestionCategoryBulkCreateResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_question_categories_bulk(
    request: category_schema.QuestionCategoryBulkCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 분류 일괄 생성 API (전부 성공 또는 전부 실패)"""
    return await taxonomy_service.create_question_categories_bulk(db, request)


@router.delete(
    "/delete-bulk",
    response_model=category_schema.QuestionCategoryBulkDeleteResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_question_categories_bulk(
    request: category_schema.QuestionCategoryBulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 분류 일괄 삭제 API (전부 성공 또는 전부 실패)"""
    return await taxonomy_service.delete_question_categories_bulk(db, request)


@router.delete("/{category_id}", response_model=common.MessageResponse, dependencies=[Depends(require_admin)])
async def delete_question_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
):
    await taxonomy_service.delete_question_category(db, category_id)
    return common.MessageResponse(message="Question category deleted successfully")
