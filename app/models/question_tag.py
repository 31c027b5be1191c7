from sqlalchemy import Column, ForeignKey, String, Table, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

# 태그 → 문제 역참조
question_tag_links = Table(
    "question_tag_links",
    Base.metadata,
    Column("question_tag_id", ForeignKey("question_tags.id", ondelete="CASCADE"), primary_key=True),
    Column("question_id", ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
)


class QuestionTag(Base, TimestampMixin):
    __tablename__ = "question_tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    is_active: Mapped[bool] = mapped_column(default=True, server_default=true(), nullable=False)

    questions: Mapped[list["Question"]] = relationship(
        "Question",
        secondary=question_tag_links,
        back_populates="tags",
    )
