from pydantic import Field, model_validator

from app.schemas.common import CamelModel


class QuestionCategoryCreateRequest(CamelModel):
    """문제 분류 생성 요청 스키마"""
    name: str = Field(..., min_length=1, max_length=200)
    subject_id: int


class QuestionCategoryBulkItem(CamelModel):
    """subject_id 또는 subject_name 중 정확히 하나"""
    name: str = Field(..., min_length=1, max_length=200)
    subject_id: int | None = None
    subject_name: str | None = None

    @model_validator(mode="after")
    def check_subject_reference(self):
        if self.subject_id is None and not self.subject_name:
            raise ValueError("Each category must have a name and subjectId or subjectName")
        if self.subject_id is not None and self.subject_name:
            raise ValueError("Both subjectId and subjectName cannot be provided. Provide only one.")
        return self


class QuestionCategoryBulkCreateRequest(CamelModel):
    categories: list[QuestionCategoryBulkItem] = Field(..., min_length=1)


class QuestionCategoryResponse(CamelModel):
    id: int
    name: str
    subject_id: int
    question_count: int | None = None


class QuestionCategoryListResponse(CamelModel):
    categories: list[QuestionCategoryResponse]
    total: int


class QuestionCategoryBulkCreateResponse(CamelModel):
    message: str
    categories: list[QuestionCategoryResponse]


class QuestionCategoryDeleteItem(CamelModel):
    """id 또는 name 중 하나로 분류 지정 (검증은 서비스에서 400으로 처리)"""
    id: int | None = None
    name: str | None = None


class QuestionCategoryBulkDeleteRequest(CamelModel):
    categories: list[QuestionCategoryDeleteItem] = Field(..., min_length=1)


class QuestionCategoryBulkDeleteResponse(CamelModel):
    message: str
    deleted_categories: list[QuestionCategoryResponse]
