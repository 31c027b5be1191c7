from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Subject(Base, TimestampMixin):
    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    modules: Mapped[list["Module"]] = relationship("Module", back_populates="subject")
    question_categories: Mapped[list["QuestionCategory"]] = relationship(
        "QuestionCategory",
        back_populates="subject",
    )
