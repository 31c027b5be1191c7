from pydantic import Field

from app.schemas.common import CamelModel


class SubjectCreateRequest(CamelModel):
    """과목 생성 요청 스키마"""
    name: str = Field(..., min_length=1, max_length=200)


class SubjectResponse(CamelModel):
    """과목 응답 스키마"""
    id: int
    name: str
    question_count: int | None = Field(None, description="해당 과목의 문제 개수 (선택사항)")


class SubjectListResponse(CamelModel):
    subjects: list[SubjectResponse]
    total: int


class SubjectReplaceRequest(CamelModel):
    """과목 전체 교체 요청 스키마"""
    subjects: list[str] | None = None


class SubjectReplaceResponse(CamelModel):
    message: str
    subjects_created: list[SubjectResponse]


class SyllabusTopic(CamelModel):
    id: int
    name: str
    difficulty: str
    length: int | None = None


class SyllabusModule(CamelModel):
    id: int
    name: str
    topics: list[SyllabusTopic]


class SyllabusSubject(CamelModel):
    id: int
    name: str
    modules: list[SyllabusModule]


class SyllabusResponse(CamelModel):
    message: str
    subjects: list[SyllabusSubject]
