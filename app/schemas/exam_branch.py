from pydantic import Field

from app.schemas.common import CamelModel


class ExamBranchCreateRequest(CamelModel):
    """시험 분야 생성 요청 스키마"""
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    exam_tag_names: list[str] = []


class ExamTagNamesAddRequest(CamelModel):
    exam_tag_names: list[str] = Field(..., min_length=1)


class ExamTagNameUpdateRequest(CamelModel):
    old_tag_name: str
    new_tag_name: str = Field(..., min_length=1)


class ExamBranchResponse(CamelModel):
    id: int
    name: str
    description: str | None
    exam_tag_names: list[str]
    is_active: bool


class ExamBranchListResponse(CamelModel):
    exam_branches: list[ExamBranchResponse]
    total: int


class ExamTagNamesAddResponse(CamelModel):
    message: str
    exam_branch: ExamBranchResponse
    added_tags: list[str]


class ExamBranchUpdateResponse(CamelModel):
    message: str
    exam_branch: ExamBranchResponse
