from pydantic import Field

from app.schemas.common import CamelModel, Pagination

AnswerValue = str | list[str] | int | float


class QuestionRecord(CamelModel):
    """import 페이로드의 문제 한 건 (분류/태그는 자유 텍스트)"""
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    tags: list[str] = []
    answer: AnswerValue | None = None
    link: str | None = None
    is_active: bool = True


class BulkQuestionCreateRequest(CamelModel):
    """문제 일괄 생성 요청 스키마"""
    questions: dict[str, QuestionRecord]
    exam_branch_names: list[str] = []


class QuestionCreateRequest(QuestionRecord):
    """문제 단건 생성 요청 스키마"""
    exam_branch_names: list[str] = []


class NumericalRange(CamelModel):
    min: float
    max: float


class BulkQuestionSuccess(CamelModel):
    question_id: int
    question_number: int
    title: str
    answer: str | list[str] | NumericalRange | None = None
    link: str | None = None


class BulkQuestionError(CamelModel):
    """error 또는 year_error 중 하나가 채워진다"""
    error: str | None = None
    year_error: str | None = None
    link: str | None = None


class InactiveTagsResult(CamelModel):
    in_active_tags: list[str]
    link: str | None = None


class BulkQuestionSummary(CamelModel):
    total: int
    successful: int
    failed: int
    already_exists: int
    in_active_tags: int


class BulkQuestionResults(CamelModel):
    success: list[BulkQuestionSuccess] = []
    errors: list[BulkQuestionError] = []
    already_exists: list[BulkQuestionError] = []
    in_active_tags_results: list[InactiveTagsResult] = []


class BulkQuestionCreateResponse(CamelModel):
    message: str
    summary: BulkQuestionSummary
    results: BulkQuestionResults


class QuestionCreateData(CamelModel):
    question_id: int
    question_number: int
    title: str
    content: str
    category: str
    tags: list[str]
    year: int
    link: str | None
    answer: str | list[str] | NumericalRange | None = None


class QuestionCreateResponse(CamelModel):
    message: str
    data: QuestionCreateData


class QuestionResponse(CamelModel):
    """문제 조회 응답 스키마"""
    id: int
    question_number: int
    title: str
    content: str
    sub_category_name: str
    question_category_name: str
    subject_name: str
    year: int
    link: str
    is_active: bool
    tags: list[str] = []
    exam_branches: list[str] = []
    correct_answer: str | None = None
    correct_answers: list[str] | None = None
    numerical_answer: float | None = None
    numerical_answer_range: NumericalRange | None = None


class QuestionListResponse(CamelModel):
    message: str
    data: list[QuestionResponse]
    pagination: Pagination


class MathNormalizationResponse(CamelModel):
    message: str
    total: int
    updated: int
