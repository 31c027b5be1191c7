from app.schemas.common import CamelModel, MessageResponse, Pagination
from app.schemas.question import (
    BulkQuestionCreateRequest,
    BulkQuestionCreateResponse,
    BulkQuestionError,
    InactiveTagsResult,
    QuestionCreateRequest,
    QuestionCreateResponse,
    QuestionRecord,
    QuestionResponse,
)
from app.schemas.user import TokenPayload, UserResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    "Pagination",
    "QuestionRecord",
    "BulkQuestionCreateRequest",
    "BulkQuestionCreateResponse",
    "BulkQuestionError",
    "InactiveTagsResult",
    "QuestionCreateRequest",
    "QuestionCreateResponse",
    "QuestionResponse",
    "TokenPayload",
    "UserResponse",
]
