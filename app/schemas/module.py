from pydantic import Field

from app.schemas.common import CamelModel


class ModuleCreateRequest(CamelModel):
    """모듈 생성 요청 스키마"""
    name: str = Field(..., min_length=1, max_length=200)
    subject_id: int


class ModuleResponse(CamelModel):
    id: int
    name: str
    subject_id: int
