from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.models.base import get_db
from app.schemas import question_tag as tag_schema
from app.services import taxonomy_service

router = APIRouter(prefix="/question-tags", tags=["question-tags"])


@router.get("", response_model=tag_schema.QuestionTagListResponse)
async def get_question_tags(
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.list_question_tags(db)


@router.post(
    "",
    response_model=tag_schema.QuestionTagResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_question_tag(
    request: tag_schema.QuestionTagCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """태그 생성 API"""
    return await taxonomy_service.create_question_tag(db, request)


@router.patch("/{tag_id}", response_model=tag_schema.QuestionTagResponse, dependencies=[Depends(require_admin)])
async def update_question_tag(
    tag_id: int,
    request: tag_schema.QuestionTagUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """태그 활성/비활성 전환 API"""
    return await taxonomy_service.update_question_tag(db, tag_id, request)
