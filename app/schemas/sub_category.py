from pydantic import Field

from app.schemas.common import CamelModel


class SubCategoryBulkItem(CamelModel):
    name: str
    question_category_names: list[str]


class SubCategoryBulkCreateRequest(CamelModel):
    """세부분류 일괄 생성/연결 요청 스키마"""
    sub_categories: list[SubCategoryBulkItem] = Field(..., min_length=1)


class SubCategoryBulkSuccess(CamelModel):
    name: str
    id: int
    is_new: bool


class SubCategoryBulkFailure(CamelModel):
    name: str
    reason: str


class SubCategoryBulkResults(CamelModel):
    success: list[SubCategoryBulkSuccess] = []
    failed: list[SubCategoryBulkFailure] = []


class SubCategoryBulkCreateResponse(CamelModel):
    message: str
    results: SubCategoryBulkResults


class SubCategoryResponse(CamelModel):
    id: int
    name: str
    question_count: int
    question_category_ids: list[int]


class SubCategoryListResponse(CamelModel):
    sub_categories: list[SubCategoryResponse]
    total: int


class SubCategoryBulkDeleteRequest(CamelModel):
    """세부분류 이름 목록 또는 ID 목록 중 하나"""
    sub_category_names: list[str] | None = None
    sub_category_ids: list[int] | None = None


class SubCategoryDeleteSuccess(CamelModel):
    identifier: str | int


class SubCategoryDeleteFailure(CamelModel):
    identifier: str | int
    reason: str


class SubCategoryBulkDeleteResults(CamelModel):
    success: list[SubCategoryDeleteSuccess] = []
    failed: list[SubCategoryDeleteFailure] = []


class SubCategoryBulkDeleteResponse(CamelModel):
    message: str
    results: SubCategoryBulkDeleteResults
