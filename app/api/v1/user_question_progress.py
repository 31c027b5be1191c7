from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_db_user
from app.models.base import get_db
from app.models.user import User
from app.schemas import progress as progress_schema
from app.services import progress_service

router = APIRouter(prefix="/user-question-progress", tags=["user-question-progress"])


@router.get("", response_model=progress_schema.QuestionProgressListResponse)
async def get_question_progress(
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    """내 문제 진도 조회 API (최근 갱신순)"""
    return await progress_service.list_question_progress(db, user)


@router.put("", response_model=progress_schema.QuestionProgressItemResponse)
async def save_question_progress(
    request: progress_schema.QuestionProgressUpdateRequest,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    """문제 진도 저장 API"""
    return await progress_service.save_question_progress(db, user, request)


@router.post("/get", response_model=progress_schema.QuestionProgressItemResponse)
async def get_question_progress_entry(
    request: progress_schema.QuestionProgressGetRequest,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    """문제 번호 하나의 진도 조회 API"""
    return await progress_service.get_question_progress(db, user, request)


@router.post("/bulk-get",response_model=progress_schema.QuestionProgressListResponse)
async def bulk_get_question_progress(
    request: progress_schema.QuestionProgressBulkGetRequest,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    return await progress_service.bulk_get_question_progress(db, user, request)


@router.get("/summary", response_model=progress_schema.QuestionProgressSummaryResponse)
async def get_question_progress_summary(
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
):
    """분류별 문제 진도 요약 API"""
    return await progress_service.get_question_progress_summary(db, user)
