from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.models.base import get_db
from app.schemas import common, sub_category as sub_category_schema
from app.services import taxonomy_service

router = APIRouter(prefix="/sub-categories", tags=["sub-categories"])


@router.get("", response_model=sub_category_schema.SubCategoryListResponse)
async def get_sub_categories(
    category_name: str = Query(..., alias="categoryName", min_length=1),
    db: AsyncSession = Depends(get_db),
):
    """분류별 세부분류 조회 API (공개)"""
    return await taxonomy_service.list_sub_categories(db, category_name)


@router.post(
    "/create-bulk",
    response_model=sub_category_schema.SubCategoryBulkCreateResponse,
    status_code=status.HTTP_207_MULTI_STATUS,
    dependencies=[Depends(require_admin)],
)
async def create_sub_categories_bulk(
    request: sub_category_schema.SubCategoryBulkCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """세부분류 일괄 생성/분류 연결 API"""
    return await taxonomy_service.create_sub_categories_bulk(db, request)


@router.delete(
    "/delete-bulk",
    response_model=sub_category_schema.SubCategoryBulkDeleteResponse,
    status_code=status.HTTP_207_MULTI_STATUS,
    dependencies=[Depends(require_admin)],
)
async def delete_sub_categories_bulk(
    request: sub_category_schema.SubCategoryBulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.delete_sub_categories_bulk(db, request)


@router.delete("/{sub_category_id}", response_model=common.MessageResponse, dependencies=[Depends(require_admin)])
async def delete_sub_category(
    sub_category_id: int,
    db: AsyncSession = Depends(get_db),
):
    await taxonomy_service.delete_sub_category(db, sub_category_id)
    return common.MessageResponse(message="Subcategory deleted successfully")
