from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, utcnow


class UserQuestionProgress(Base, TimestampMixin):
    __tablename__ = "user_question_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "question_id", name="uq_user_question_progress"),
        CheckConstraint("time_spent >= 0", name="ck_user_question_progress_time_spent"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    time_spent: Mapped[int] = mapped_column(default=0, nullable=False)  # 초 단위
    is_completed: Mapped[bool] = mapped_column(default=True, nullable=False)
    to_revise: Mapped[bool] = mapped_column(default=False, nullable=False)
    remarks: Mapped[str] = mapped_column(Text, default="", nullable=False)
    attempted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    question: Mapped["Question"] = relationship("Question")
