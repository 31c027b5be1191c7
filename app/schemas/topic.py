from pydantic import Field

from app.models.topic import Difficulty
from app.schemas.common import CamelModel


class TopicInput(CamelModel):
    name: str = Field(..., min_length=1, max_length=300)
    length: int | None = Field(None, ge=0)
    difficulty: Difficulty = Difficulty.MEDIUM


class TopicBulkCreateRequest(CamelModel):
    """모듈에 여러 주제 추가 요청 스키마"""
    module_id: int
    topics: list[TopicInput] = Field(..., min_length=1)


class TopicResponse(CamelModel):
    id: int
    name: str
    module_id: int
    length: int | None
    difficulty: Difficulty


class TopicListResponse(CamelModel):
    topics: list[TopicResponse]
    total: int
