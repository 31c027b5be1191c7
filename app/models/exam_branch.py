from sqlalchemy import JSON, String, Text, true
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class ExamBranch(Base, TimestampMixin):
    __tablename__ = "exam_branches"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    # 순서 유지 (예: ["gate-cse-2019", "gate-cse-2020"])
    exam_tag_names: Mapped[list[str]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        default=list,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(default=True, server_default=true(), nullable=False)
