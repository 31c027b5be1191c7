from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.models.base import get_db
from app.schemas import common, exam_branch as exam_branch_schema
from app.services import taxonomy_service

router = APIRouter(prefix="/exam-branches", tags=["exam-branches"])


@router.get("", response_model=exam_branch_schema.ExamBranchListResponse)
async def get_exam_branches(
    db: AsyncSession = Depends(get_db),
):
    """시험 분야 목록 조회 API"""
    return await taxonomy_service.list_exam_branches(db)


@router.post(
    "",
    response_model=exam_branch_schema.ExamBranchResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_exam_branch(
    request: exam_branch_schema.ExamBranchCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.create_exam_branch(db, request)


@router.post(
    "/{branch_name}/tag-names",
    response_model=exam_branch_schema.ExamTagNamesAddResponse,
    dependencies=[Depends(require_admin)],
)
async def add_exam_tag_names(
    branch_name: str,
    request: exam_branch_schema.ExamTagNamesAddRequest,
    db: AsyncSession = Depends(get_db),
):
    """examTagNames 추가 API"""
    return await taxonomy_service.add_exam_tag_names(db, branch_name, request)


@router.put(
    "/{branch_name}/tag-names",
    response_model=exam_branch_schema.ExamBranchUpdateResponse,
    dependencies=[Depends(require_admin)],
)
async def update_exam_tag_name(
    branch_name: str,
    request: exam_branch_schema.ExamTagNameUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.update_exam_tag_name(db, branch_name, request)


@router.delete(
    "/{branch_name}/tag-names/{tag_name}",
    response_model=exam_branch_schema.ExamBranchUpdateResponse,
    dependencies=[Depends(require_admin)],
)
async def remove_exam_tag_name(
    branch_name: str,
    tag_name: str,
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.remove_exam_tag_name(db, branch_name, tag_name)


@router.delete("/{branch_id}", response_model=common.MessageResponse, dependencies=[Depends(require_admin)])
async def delete_exam_branch(
    branch_id: int,
    db: AsyncSession = Depends(get_db),
):
    """시험 분야 삭제 API"""
    await taxonomy_service.delete_exam_branch(db, branch_id)
    return common.MessageResponse(message="Exam branch deleted successfully")
