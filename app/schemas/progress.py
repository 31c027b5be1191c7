from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class TopicProgressUpdateRequest(CamelModel):
    is_completed: bool = False
    to_revise: bool = False


class TopicProgressBulkItem(CamelModel):
    topic_id: int | None = None
    is_completed: bool = False
    to_revise: bool = False


class TopicProgressBulkUpdateRequest(CamelModel):
    """주제 진도 일괄 갱신 요청 스키마"""
    updates: list[TopicProgressBulkItem] = Field(..., min_length=1)


class TopicProgressBulkCheckRequest(CamelModel):
    topic_ids: list[int] = Field(..., min_length=1)


class TopicProgressResponse(CamelModel):
    topic_id: int
    is_completed: bool
    to_revise: bool


class TopicProgressListResponse(CamelModel):
    success: bool = True
    data: list[TopicProgressResponse]


class TopicProgressItemResponse(CamelModel):
    success: bool = True
    data: TopicProgressResponse


class ModuleProgressSummary(CamelModel):
    module_id: int
    module_name: str
    total_topics: int
    completed: int
    to_revise: int
    completion_percentage: str


class SubjectProgressSummary(CamelModel):
    subject_id: int
    subject_name: str
    total_topics: int
    completed: int
    to_revise: int
    completion_percentage: str
    modules: list[ModuleProgressSummary]


class TopicProgressSummary(CamelModel):
    total_topics: int
    completed: int
    to_revise: int
    completion_percentage: str
    subjects: list[SubjectProgressSummary]


class TopicProgressSummaryResponse(CamelModel):
    success: bool = True
    data: TopicProgressSummary


class QuestionProgressUpdateRequest(CamelModel):
    """문제 진도 저장 요청 스키마 (questionNumber 기준 upsert)"""
    question_number: int
    time_spent: int = Field(0, ge=0, description="소요 시간 (초)")
    is_completed: bool = True
    to_revise: bool = False
    remarks: str = ""


class QuestionProgressGetRequest(CamelModel):
    question_number: int


class QuestionProgressBulkGetRequest(CamelModel):
    question_numbers: list[int] = Field(..., min_length=1)


class QuestionProgressResponse(CamelModel):
    question_id: int
    question_number: int
    time_spent: int
    is_completed: bool
    to_revise: bool
    remarks: str
    attempted_at: datetime


class QuestionProgressListResponse(CamelModel):
    success: bool = True
    data: list[QuestionProgressResponse]


class QuestionProgressItemResponse(CamelModel):
    success: bool = True
    message: str
    data: QuestionProgressResponse


class CategoryProgressSummary(CamelModel):
    category_id: int
    category_name: str
    total_questions: int
    completed: int
    to_revise: int
    completion_percentage: str


class QuestionProgressSummary(CamelModel):
    total_questions: int
    total_completed: int
    total_to_revise: int
    overall_completion_percentage: str
    category_summaries: list[CategoryProgressSummary]


class QuestionProgressSummaryResponse(CamelModel):
    success: bool = True
    data: QuestionProgressSummary
