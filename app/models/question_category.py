from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class QuestionCategory(Base, TimestampMixin):
    __tablename__ = "question_categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    # 소문자 + 하이픈 형태 (예: operating-systems)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    subject_id: Mapped[int] = mapped_column(ForeignKey("subjects.id"), nullable=False, index=True)

    subject: Mapped["Subject"] = relationship("Subject", back_populates="question_categories")
    sub_categories: Mapped[list["SubCategory"]] = relationship(
        "SubCategory",
        secondary="sub_category_question_categories",
        back_populates="question_categories",
    )
