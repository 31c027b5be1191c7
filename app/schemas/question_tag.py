from pydantic import Field

from app.schemas.common import CamelModel


class QuestionTagCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    is_active: bool = True


class QuestionTagUpdateRequest(CamelModel):
    is_active: bool


class QuestionTagResponse(CamelModel):
    id: int
    name: str
    is_active: bool


class QuestionTagListResponse(CamelModel):
    tags: list[QuestionTagResponse]
    total: int
