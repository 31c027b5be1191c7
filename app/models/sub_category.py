from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

# 복합 PK로 한 세부분류에 같은 분류가 두 번 연결되지 않는다
sub_category_question_categories = Table(
    "sub_category_question_categories",
    Base.metadata,
    Column("sub_category_id", ForeignKey("sub_categories.id", ondelete="CASCADE"), primary_key=True),
    Column("question_category_id", ForeignKey("question_categories.id", ondelete="CASCADE"), primary_key=True),
)


class SubCategory(Base, TimestampMixin):
    __tablename__ = "sub_categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    question_count: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)

    question_categories: Mapped[list["QuestionCategory"]] = relationship(
        "QuestionCategory",
        secondary=sub_category_question_categories,
        back_populates="sub_categories",
        lazy="selectin",
    )
