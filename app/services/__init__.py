from app.services.question_ingestion import (
    create_bulk_questions,
    create_question,
    ensure_question_invariants,
    ingest_questions,
    process_bulk_questions,
)
from app.services.question_rules import QuestionKind, classify_question_kind, parse_answer

__all__ = [
    "QuestionKind",
    "classify_question_kind",
    "parse_answer",
    "process_bulk_questions",
    "create_bulk_questions",
    "ensure_question_invariants",
    "ingest_questions",
    "create_question",
]
