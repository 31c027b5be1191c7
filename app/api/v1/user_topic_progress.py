from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_db_user
from app.models.base import get_db
from app.models.user import User
from app.schemas import common, progress as progress_schema
from app.services import progress_service

router = APIRouter(prefix="/user-topic-progress", tags=["user-topic-progress"])


@router.get("", response_model=progress_schema.TopicProgressListResponse)
async def get_all_topic_progress(
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    """내 주제 진도 전체 조회 API"""
    return await progress_service.list_topic_progress(db, user)


@router.get("/summary", response_model=progress_schema.TopicProgressSummaryResponse)
async def get_topic_progress_summary(
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    """과목/모듈별 진도 요약 API"""
    return await progress_service.get_topic_progress_summary(db, user)


@router.post("/bulk-update", response_model=progress_schema.TopicProgressListResponse)
async def bulk_update_topic_progress(
    request: progress_schema.TopicProgressBulkUpdateRequest,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    return await progress_service.bulk_update_topic_progress(db, user, request)


@router.post("/bulk-check", response_model=progress_schema.TopicProgressListResponse)
async def bulk_check_topic_progress(
    request: progress_schema.TopicProgressBulkCheckRequest,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    return await progress_service.bulk_check_topic_progress(db, user, request)


@router.get("/{topic_id}", response_model=progress_schema.TopicProgressItemResponse)
async def get_topic_progress(
    topic_id: int,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    return await progress_service.get_topic_progress(db, user, topic_id)


@router.put("/{topic_id}", response_model=progress_schema.TopicProgressItemResponse)
async def update_topic_progress(
    topic_id: int,
    request: progress_schema.TopicProgressUpdateRequest,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    """주제 진도 저장 API"""
    return await progress_service.update_topic_progress(db, user, topic_id, request)


@router.delete("/{topic_id}", response_model=common.MessageResponse)
async def delete_topic_progress(
    topic_id: int,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    await progress_service.delete_topic_progress(db, user, topic_id)
    return common.MessageResponse(message="Progress entry deleted successfully")
