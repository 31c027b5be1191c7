from sqlalchemy import JSON, Column, ForeignKey, Index, String, Table, Text, true
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin
from app.models.question_tag import question_tag_links

question_exam_branches = Table(
    "question_exam_branches",
    Base.metadata,
    Column("question_id", ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
    Column("exam_branch_id", ForeignKey("exam_branches.id", ondelete="CASCADE"), primary_key=True),
)


class Question(Base, TimestampMixin):
    __tablename__ = "questions"
    __table_args__ = (
        Index(
            "ix_questions_denormalized_names",
            "subject_name",
            "question_category_name",
            "sub_category_name",
            "year",
        ),
        Index("ix_questions_year_number", "year", "question_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    # 배치 시작 시 읽은 개수 기반으로 부여되어 동시 import 간 중복 가능
    question_number: Mapped[int] = mapped_column(nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    sub_category_id: Mapped[int] = mapped_column(ForeignKey("sub_categories.id"), nullable=False, index=True)
    sub_category_name: Mapped[str] = mapped_column(String(200), nullable=False)
    question_category_id: Mapped[int] = mapped_column(
        ForeignKey("question_categories.id"),
        nullable=False,
        index=True,
    )
    question_category_name: Mapped[str] = mapped_column(String(200), nullable=False)
    subject_name: Mapped[str] = mapped_column(String(200), nullable=False)

    year: Mapped[int] = mapped_column(nullable=False)
    link: Mapped[str] = mapped_column(String(1000), nullable=False, unique=True, index=True)
    is_active: Mapped[bool] = mapped_column(default=True, server_default=true(), nullable=False)

    # MCQ
    correct_answer: Mapped[str | None] = mapped_column(Text, default=None)
    # MSQ
    correct_answers: Mapped[list[str] | None] = mapped_column(
        JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"),
        default=None,
    )
    # NAT
    numerical_answer: Mapped[float | None] = mapped_column(default=None)
    numerical_answer_min: Mapped[float | None] = mapped_column(default=None)
    numerical_answer_max: Mapped[float | None] = mapped_column(default=None)

    sub_category: Mapped["SubCategory"] = relationship("SubCategory")
    question_category: Mapped["QuestionCategory"] = relationship("QuestionCategory")
    tags: Mapped[list["QuestionTag"]] = relationship(
        "QuestionTag",
        secondary=question_tag_links,
        back_populates="questions",
    )
    exam_branches: Mapped[list["ExamBranch"]] = relationship(
        "ExamBranch",
        secondary=question_exam_branches,
    )

    @property
    def numerical_answer_range(self) -> dict[str, float] | None:
        if self.numerical_answer_min is None or self.numerical_answer_max is None:
            return None
        return {"min": self.numerical_answer_min, "max": self.numerical_answer_max}

    @property
    def answer(self) -> str | list[str] | dict[str, float] | None:
        """저장된 정답 필드 중 채워진 것"""
        return self.correct_answer or self.correct_answers or self.numerical_answer_range
