from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_admin
from app.models.base import get_db
from app.schemas import (
    common,
    module as module_schema,
    subject as subject_schema,
    topic as topic_schema,
)
from app.services import taxonomy_service

router = APIRouter(tags=["syllabus"])


@router.get("/subjects", response_model=subject_schema.SubjectListResponse)
async def get_subjects(
    db: AsyncSession = Depends(get_db),
):
    """과목 목록 조회 API (문제 개수 포함)"""
    return await taxonomy_service.list_subjects(db)


@router.post(
    "/subjects",
    response_model=subject_schema.SubjectResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_subject(
    request: subject_schema.SubjectCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.create_subject(db, request)


@router.post(
    "/subjects/replace-all",
    response_model=subject_schema.SubjectReplaceResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def replace_subjects(
    request: subject_schema.SubjectReplaceRequest,
    db: AsyncSession = Depends(get_db),
):
    """과목 전체 교체 API"""
    return await taxonomy_service.replace_subjects(db, request)


@router.delete("/subjects/{subject_id}", response_model=common.MessageResponse, dependencies=[Depends(require_admin)])
async def delete_subject(
    subject_id: int,
    db: AsyncSession = Depends(get_db),
):
    """과목 삭제 API"""
    await taxonomy_service.delete_subject(db, subject_id)
    return common.MessageResponse(message="Subject deleted successfully")


@router.post(
    "/modules",
    response_model=module_schema.ModuleResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_module(
    request: module_schema.ModuleCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """모듈 추가 API"""
    return await taxonomy_service.create_module(db, request)


@router.post(
    "/topics/bulk",
    response_model=topic_schema.TopicListResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def add_topics(
    request: topic_schema.TopicBulkCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """모듈에 주제 일괄 추가 API"""
    return await taxonomy_service.add_topics(db, request)


@router.get("/topics", response_model=topic_schema.TopicListResponse)
async def get_topics(
    module_id: int | None = Query(None, alias="moduleId"),
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.list_topics(db, module_id)


@router.get("/syllabus", response_model=subject_schema.SyllabusResponse, dependencies=[Depends(get_current_user)])
async def get_syllabus(
    db: AsyncSession = Depends(get_db),
):
    """과목 → 모듈 → 주제 트리 조회 API"""
    return await taxonomy_service.get_syllabus(db)
