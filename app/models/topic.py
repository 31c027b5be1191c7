import enum

from sqlalchemy import Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Difficulty(str, enum.Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Topic(Base, TimestampMixin):
    __tablename__ = "topics"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    module_id: Mapped[int] = mapped_column(ForeignKey("modules.id"), nullable=False, index=True)
    length: Mapped[int | None] = mapped_column(default=None)
    difficulty: Mapped[Difficulty] = mapped_column(
        Enum(Difficulty, name="topic_difficulty", values_callable=lambda e: [m.value for m in e]),
        default=Difficulty.MEDIUM,
        nullable=False,
    )

    module: Mapped["Module"] = relationship("Module", back_populates="topics")
